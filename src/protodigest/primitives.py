"""
primitives.py — Pluggable Digest Primitives

A digest primitive is any zero-argument factory returning a fresh
hashlib-style object: ``update(data)``, ``digest()`` and ``digest_size``.
``hashlib.sha256`` qualifies as-is; ``functools.partial(hashlib.blake2b,
digest_size=8)`` gives a 64-bit variant.

The default is FNV-1a 64, a fast non-cryptographic function. Digests are read
as big-endian integers, which for FNV is the hash state itself.
"""

from __future__ import annotations
import functools
import hashlib
import logging
from typing import Any, Callable, Dict, List

from .errors import UnknownPrimitiveError

logger = logging.getLogger(__name__)

DigestPrimitive = Callable[[], Any]

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
_MASK64 = (1 << 64) - 1


class Fnv1a64:
    """FNV-1a 64-bit hash with the hashlib object interface."""

    name = "fnv1a64"
    digest_size = 8
    block_size = 1

    def __init__(self, data: bytes = b""):
        self._state = FNV64_OFFSET_BASIS
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        h = self._state
        for byte in bytes(data):
            h = ((h ^ byte) * FNV64_PRIME) & _MASK64
        self._state = h

    def digest(self) -> bytes:
        return self._state.to_bytes(self.digest_size, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()

    def intdigest(self) -> int:
        return self._state

    def copy(self) -> "Fnv1a64":
        other = Fnv1a64()
        other._state = self._state
        return other


def fnv1a64(data: bytes = b"") -> Fnv1a64:
    """Return a fresh FNV-1a 64 hash object (the default primitive)."""
    return Fnv1a64(data)


# ---------------------------------------------------------------------------
# Named registry
# ---------------------------------------------------------------------------

_REGISTRY: Dict[str, DigestPrimitive] = {
    "fnv1a64": fnv1a64,
    "blake2b-64": functools.partial(hashlib.blake2b, digest_size=8),
    "blake2b-128": functools.partial(hashlib.blake2b, digest_size=16),
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}

DEFAULT_PRIMITIVE = "fnv1a64"


def available_primitives() -> List[str]:
    """Names accepted by ``resolve_primitive``, sorted."""
    return sorted(_REGISTRY)


def resolve_primitive(name: str) -> DigestPrimitive:
    """Look up a registered primitive factory by name.

    Args:
        name: Registry name such as ``fnv1a64`` or ``blake2b-64``.

    Returns:
        DigestPrimitive: Factory producing fresh hash objects.

    Raises:
        UnknownPrimitiveError: If ``name`` is not registered.
    """
    key = name.strip().lower()
    if key not in _REGISTRY:
        raise UnknownPrimitiveError(
            f"{name!r} (available: {', '.join(available_primitives())})"
        )
    logger.debug("Resolved digest primitive %s", key)
    return _REGISTRY[key]


def primitive_digest_size(primitive: DigestPrimitive) -> int:
    """Output width in bytes of the objects ``primitive`` produces."""
    return primitive().digest_size
