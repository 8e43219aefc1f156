from .errors import AllocationFailure, DecodeError, InvalidParams, KdfError, OutputLengthError
from .params import ScryptParams
from .pbkdf2 import pbkdf2, pbkdf2_hmac_sha256
from .romix import block_mix, ro_mix
from .salsa import salsa20_8
from .scrypt import scrypt, scrypt_kdf
from .simple import (create_password_hash, create_pbkdf2_hash, verify_password,
                     verify_pbkdf2_hash)

__version__ = '0.1.0'
