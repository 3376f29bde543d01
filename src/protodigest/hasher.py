"""
hasher.py — Protobuf Message Content Hashing

``ProtoHasher`` walks a message's present fields in ascending field-number
order and folds one digest per field into a running value with the ordered
combinator:

  - singular scalar  -> digest of its canonical encoding
  - singular message -> recursive message digest
  - repeated field   -> ordered fold, last element first
  - map field        -> per entry ordered(key, value), XOR across entries,
                        then hardened

An empty or all-default message digests to 0. Field numbers are not mixed
in, so a value moved into a oneof under the same number keeps its digest.

A fresh primitive object is created for every leaf, so one hasher can be
shared across threads.

Example:
    from protodigest import new, with_algorithm

    hasher = new(with_algorithm("fnv1a64"))
    print(hasher.hexdigest(msg))
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Iterable, Optional, Tuple

from google.protobuf.message import Message

from .canonical import encode_scalar
from .combinators import (
    digest_of,
    hash_finish_unordered,
    hash_update_ordered,
    hash_update_unordered,
)
from .errors import ProtoDigestError
from .primitives import DigestPrimitive, fnv1a64, primitive_digest_size, resolve_primitive
from .reflection import Cardinality, FieldView, Kind, ensure_message, present_fields

logger = logging.getLogger(__name__)

HashOption = Callable[["ProtoHasher"], None]


class ProtoHasher:
    """Content hasher for protobuf messages."""

    def __init__(self, primitive: Optional[DigestPrimitive] = None):
        self.primitive = primitive or fnv1a64

    @property
    def primitive(self) -> DigestPrimitive:
        return self._primitive

    @primitive.setter
    def primitive(self, factory: DigestPrimitive) -> None:
        self._primitive = factory
        self._digest_size = primitive_digest_size(factory)

    @property
    def digest_size(self) -> int:
        """Digest width in bytes."""
        return self._digest_size

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def hash_message(self, msg: Message) -> int:
        """Return the content digest of ``msg``.

        Args:
            msg: Protobuf message to fingerprint.

        Returns:
            int: Unsigned digest, ``digest_size`` bytes wide. 0 for an empty
            message.

        Raises:
            InvalidArgumentError: ``msg`` is None or not a message.
            InvalidStateError: ``msg`` cannot be introspected.
            UnsupportedKindError: A field kind has no canonical encoding.
            EncodingFailureError: A value could not be fed to the primitive.
        """
        try:
            digest = self._hash_message(ensure_message(msg))
        except ProtoDigestError as exc:
            logger.debug("hash_message failed: %s", exc)
            raise
        logger.debug("hash_message %s -> %0*x", msg.DESCRIPTOR.full_name, self._digest_size * 2, digest)
        return digest

    def hexdigest(self, msg: Message) -> str:
        """Zero-padded lowercase hex rendering of ``hash_message(msg)``."""
        return format(self.hash_message(msg), f"0{self._digest_size * 2}x")

    def hash_list(self, kind: Kind, values: Iterable[Any]) -> int:
        """Order-sensitive fold over a homogeneous sequence."""
        items = list(values)
        h = 0
        for i in range(len(items) - 1, -1, -1):
            h = self._ordered(h, self._hash_value(kind, items[i]))
        return h

    def hash_map(self, key_kind: Kind, value_kind: Kind, entries: Iterable[Tuple[Any, Any]]) -> int:
        """Order-insensitive fold over key/value pairs with unique keys."""
        h = 0
        empty = True
        for key, value in entries:
            entry = self._ordered(self._hash_value(key_kind, key), self._hash_value(value_kind, value))
            h = hash_update_unordered(h, entry)
            empty = False
        if empty:
            return 0
        return hash_finish_unordered(self._primitive, h, self._digest_size)

    # -----------------------------------------------------------------------
    # Walker
    # -----------------------------------------------------------------------

    def _hash_message(self, msg: Message) -> int:
        h = 0
        for field in present_fields(msg):
            h = self._ordered(h, self._hash_field(field))
        return h

    def _hash_field(self, field: FieldView) -> int:
        if field.cardinality is Cardinality.LIST:
            return self.hash_list(field.kind, field.value)
        if field.cardinality is Cardinality.MAP:
            return self.hash_map(field.key_kind, field.value_kind, field.value.items())
        return self._hash_value(field.kind, field.value)

    def _hash_value(self, kind: Kind, value: Any) -> int:
        if kind is Kind.MESSAGE:
            return self._hash_message(value)
        return digest_of(self._primitive, encode_scalar(kind, value, self._digest_size))

    def _ordered(self, a: int, b: int) -> int:
        return hash_update_ordered(self._primitive, a, b, self._digest_size)


# ---------------------------------------------------------------------------
# Construction options
# ---------------------------------------------------------------------------

def with_primitive(primitive: DigestPrimitive) -> HashOption:
    """Option: use ``primitive`` (a hashlib-style factory) for every leaf."""
    def apply(hasher: ProtoHasher) -> None:
        hasher.primitive = primitive
    return apply


def with_algorithm(name: str) -> HashOption:
    """Option: use the registered primitive called ``name``."""
    primitive = resolve_primitive(name)
    return with_primitive(primitive)


def new(*options: HashOption) -> ProtoHasher:
    """Create a ``ProtoHasher`` with FNV-1a 64 and apply ``options`` in order."""
    hasher = ProtoHasher()
    for option in options:
        option(hasher)
    return hasher


_default_hasher: Optional[ProtoHasher] = None


def hash_message(msg: Message) -> int:
    """Digest ``msg`` with a shared default ``ProtoHasher``."""
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = ProtoHasher()
    return _default_hasher.hash_message(msg)
