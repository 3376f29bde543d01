"""protodigest public API.

Stable content fingerprints for protobuf messages: equivalent values hash
equally regardless of wire encoding, map iteration order, integer width, or
moving a field into a oneof under the same field number.

Example:
    from protodigest import new, with_algorithm

    hasher = new()
    digest = hasher.hash_message(msg)
    print(hasher.hexdigest(msg))
"""

from .canonical import encode_digest, encode_scalar
from .combinators import hash_finish_unordered, hash_update_ordered, hash_update_unordered
from .errors import (
    ProtoDigestError,
    InvalidArgumentError,
    InvalidStateError,
    UnsupportedKindError,
    EncodingFailureError,
    UnknownPrimitiveError,
)
from .hasher import ProtoHasher, HashOption, hash_message, new, with_algorithm, with_primitive
from .primitives import Fnv1a64, available_primitives, fnv1a64, resolve_primitive
from .reflection import Cardinality, FieldView, Kind, present_fields


__version__ = "1.0.0"
__all__ = [
    "ProtoHasher",
    "HashOption",
    "new",
    "with_primitive",
    "with_algorithm",
    "hash_message",
    "encode_scalar",
    "encode_digest",
    "hash_update_ordered",
    "hash_update_unordered",
    "hash_finish_unordered",
    "Fnv1a64",
    "fnv1a64",
    "resolve_primitive",
    "available_primitives",
    "Kind",
    "Cardinality",
    "FieldView",
    "present_fields",
    "ProtoDigestError",
    "InvalidArgumentError",
    "InvalidStateError",
    "UnsupportedKindError",
    "EncodingFailureError",
    "UnknownPrimitiveError",
]
