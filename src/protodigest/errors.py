"""
errors.py — protodigest Error Taxonomy

Structured error codes for message hashing. Every failure aborts the whole
``hash_message`` call; no partial digest is ever returned.
"""

from typing import Optional

__all__ = [
    "ProtoDigestError",
    "InvalidArgumentError",
    "InvalidStateError",
    "UnsupportedKindError",
    "EncodingFailureError",
    "UnknownPrimitiveError",
]

class ProtoDigestError(Exception):
    """Base class for all protodigest errors."""
    def __init__(
        self,
        code: str,
        message: str,
        context: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.context = context

        full_msg = f"[{code}] {message}"
        if context:
            full_msg += f" Context: {context}"

        super().__init__(full_msg)

# Input Errors (E0xx)
class InvalidArgumentError(ProtoDigestError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("PROTODIGEST_E001", "The value passed for hashing is not a protobuf message.", context)

class InvalidStateError(ProtoDigestError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("PROTODIGEST_E002", "The message cannot be introspected; it is corrupt or partially constructed.", context)

# Schema Errors (E1xx)
class UnsupportedKindError(ProtoDigestError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("PROTODIGEST_E100", "The field kind has no canonical encoding.", context)

# Primitive Errors (E2xx)
class EncodingFailureError(ProtoDigestError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("PROTODIGEST_E200", "A value could not be encoded into the digest primitive.", context)

# Configuration Errors (E3xx)
class UnknownPrimitiveError(ProtoDigestError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("PROTODIGEST_E300", "No digest primitive is registered under the requested name.", context)
