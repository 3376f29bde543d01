"""
canonical.py — Canonical Scalar Encoding

Every scalar is widened to one representative form before it reaches the
digest primitive, so fields of different wire types holding the same value
encode identically:

  - bool                  -> 1 byte, 0x00 or 0x01
  - signed integers, enum -> 8-byte little-endian two's complement
  - unsigned integers     -> 8-byte little-endian
  - float                 -> rounded to binary32, promoted, 8-byte LE double
  - double                -> 8-byte LE double (NaN payload preserved)
  - string                -> raw UTF-8, no length prefix, no normalization
  - bytes                 -> raw bytes, no length prefix
  - message               -> the sub-message digest, little-endian

A float holding 0.1 and a double holding 0.1 encode differently: the binary32
value promotes to 0.10000000149011612.
"""

from __future__ import annotations
import struct
from typing import Any, Callable, Dict

from .errors import EncodingFailureError, UnsupportedKindError
from .reflection import Kind

_INT64 = struct.Struct("<q")
_UINT64 = struct.Struct("<Q")
_FLOAT32 = struct.Struct("<f")
_FLOAT64 = struct.Struct("<d")


def encode_digest(digest: int, digest_size: int = 8) -> bytes:
    """Little-endian fixed-width encoding of a digest."""
    return digest.to_bytes(digest_size, "little")


def promote_float32(value: float) -> float:
    """Round ``value`` to binary32 and return it as a Python float."""
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


def _encode_bool(value: Any) -> bytes:
    return b"\x01" if value else b"\x00"


def _encode_signed(value: Any) -> bytes:
    return _INT64.pack(int(value))


def _encode_unsigned(value: Any) -> bytes:
    return _UINT64.pack(int(value))


def _encode_float(value: Any) -> bytes:
    return _FLOAT64.pack(promote_float32(value))


def _encode_double(value: Any) -> bytes:
    return _FLOAT64.pack(value)


def _encode_string(value: Any) -> bytes:
    return value.encode("utf-8")


def _encode_bytes(value: Any) -> bytes:
    return bytes(value)


_ENCODERS: Dict[Kind, Callable[[Any], bytes]] = {
    Kind.BOOL: _encode_bool,
    Kind.SIGNED: _encode_signed,
    Kind.UNSIGNED: _encode_unsigned,
    Kind.ENUM: _encode_signed,
    Kind.FLOAT: _encode_float,
    Kind.DOUBLE: _encode_double,
    Kind.STRING: _encode_string,
    Kind.BYTES: _encode_bytes,
}


def encode_scalar(kind: Kind, value: Any, digest_size: int = 8) -> bytes:
    """Return the canonical bytes for one value of ``kind``.

    For ``Kind.MESSAGE`` the value is the already computed sub-message digest.

    Args:
        kind: Canonical kind of the value.
        value: Native Python value as exposed by the protobuf runtime.
        digest_size: Digest width in bytes, used for ``Kind.MESSAGE`` only.

    Returns:
        bytes: Canonical encoding.

    Raises:
        UnsupportedKindError: If ``kind`` has no encoder.
        EncodingFailureError: If the value cannot be packed in its canonical form.
    """
    encoder = _ENCODERS.get(kind)
    if encoder is None and kind is not Kind.MESSAGE:
        raise UnsupportedKindError(f"no canonical encoding for kind {kind!r}")

    try:
        if encoder is None:
            return encode_digest(value, digest_size)
        return encoder(value)
    except (struct.error, OverflowError, TypeError, ValueError, UnicodeError, AttributeError) as exc:
        raise EncodingFailureError(f"{kind.value} value {value!r}: {exc}") from exc
