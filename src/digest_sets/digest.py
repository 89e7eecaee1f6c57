"""
Content digests used as ordering keys.

Every set in this package orders its entries by the SHA-256 digest of the
value rather than by the value itself, so values never need to be
comparable. The key space (64 lowercase hex characters) is totally ordered
by plain string comparison.
"""
import hashlib

DIGEST_HEX_LENGTH = 64


class InvalidArgument(ValueError):
    """Raised when a value cannot be keyed (currently: ``None``)."""


def canonical_bytes(value) -> bytes:
    """
    Render *value* to the byte string that gets hashed.

    Binary values are hashed as-is; everything else goes through ``str()``
    and UTF-8, so ``5`` and ``"5"`` map to the same key.

    Raises:
        InvalidArgument: If *value* is None.
    """
    if value is None:
        raise InvalidArgument("None values are not allowed")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return str(value).encode("utf-8")


def digest(value) -> str:
    """Return the SHA-256 hex digest of *value*'s canonical byte form."""
    return hashlib.sha256(canonical_bytes(value)).hexdigest()


def short_key(key: str, width: int = 8) -> str:
    """Shorten a hex key for display purposes."""
    return key if len(key) <= width else key[:width]
