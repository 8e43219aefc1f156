class KdfError(ValueError):
    """Base class for every error raised by scrypt_kdf."""


class InvalidParams(KdfError):
    """Cost parameters (or PBKDF2 iteration count) out of range."""


class OutputLengthError(KdfError):
    """Requested key length is zero or larger than PBKDF2 can produce."""


class AllocationFailure(KdfError, MemoryError):
    """The ROMix scratch table could not be allocated."""


class DecodeError(KdfError):
    """A stored password hash string is malformed."""
