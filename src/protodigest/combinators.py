"""
combinators.py — Digest Combination Algebras

Adapted from the ordered/unordered update scheme of
https://github.com/mitchellh/hashstructure.

  - hash_update_ordered(a, b):  H(le(a) || le(b)), non-commutative
  - hash_update_unordered(a, b): a XOR b, commutative
  - hash_finish_unordered(a):   H(le(a)), one-way hardening

After mixing a group of hashes with ``hash_update_unordered`` the result MUST
go through ``hash_finish_unordered`` before it is combined with anything else.
XOR cancels repeated terms:

    (H(A) ^ H(B)) ^ (H(A) ^ H(C)) == H(B) ^ H(C)
                                  == (H(Z) ^ H(B)) ^ (H(Z) ^ H(C))

so overlapping input met later in a different context would otherwise erase
an earlier change. Ordered results are already one-way and need no finish.
"""

from __future__ import annotations

from .canonical import encode_digest
from .errors import EncodingFailureError
from .primitives import DigestPrimitive


def digest_of(primitive: DigestPrimitive, data: bytes) -> int:
    """Digest ``data`` with a fresh primitive object and return it as an int."""
    try:
        h = primitive()
        h.update(data)
        out = h.digest()
    except Exception as exc:
        name = getattr(primitive, "__name__", primitive)
        raise EncodingFailureError(f"primitive {name!r}: {exc}") from exc
    return int.from_bytes(out, "big")


def hash_update_ordered(primitive: DigestPrimitive, a: int, b: int, digest_size: int = 8) -> int:
    return digest_of(primitive, encode_digest(a, digest_size) + encode_digest(b, digest_size))


def hash_update_unordered(a: int, b: int) -> int:
    return a ^ b


def hash_finish_unordered(primitive: DigestPrimitive, a: int, digest_size: int = 8) -> int:
    return digest_of(primitive, encode_digest(a, digest_size))
