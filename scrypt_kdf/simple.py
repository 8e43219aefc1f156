"""Password hashing helpers built on scrypt and PBKDF2.

Stored hashes are self-describing strings, so a verifier only needs the
string itself::

    $rscrypt$<format>$<base64(log_n, r, p)>$<base64(salt)>$<base64(hash)>$
    $rpbkdf2$0$<base64(be32 iterations)>$<base64(salt)>$<base64(hash)>$

Format ``0`` packs log_n, r and p into one byte each and is used whenever r
and p are below 256; format ``1`` keeps log_n in one byte and stores r and p
as little-endian u32. All fields use standard base64 with padding.
"""
import base64
import binascii
import hmac
import os
import struct
from typing import List, Optional, Tuple, Union

from .errors import DecodeError, InvalidParams
from .params import DEFAULT_MAX_MEMORY, ScryptParams
from .pbkdf2 import pbkdf2_hmac_sha256
from .scrypt import scrypt

SALT_LEN = 16
DKLEN = 32
PBKDF2_ITERATIONS = 10000

Password = Union[str, bytes]


def _password_bytes(password: Password) -> bytes:
    if isinstance(password, str):
        return password.encode('utf-8')
    return bytes(password)


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


def _unb64(field: str) -> bytes:
    try:
        return base64.b64decode(field.encode('ascii'), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise DecodeError('invalid base64 field') from e


def _split(stored: str, name: str) -> List[str]:
    # '$name$fmt$params$salt$hash$' splits into 7 parts, empty at both ends
    parts = stored.split('$')
    if len(parts) != 7 or parts[0] != '' or parts[-1] != '':
        raise DecodeError('expected 5 "$"-separated fields')
    if parts[1] != name:
        raise DecodeError('not an %s hash' % name)
    return parts[2:6]


# ---------- scrypt ----------
def encode_hash(params: ScryptParams, salt: bytes, dk: bytes) -> str:
    if params.r < 256 and params.p < 256:
        fmt = '0'
        packed = bytes([params.log_n, params.r, params.p])
    else:
        fmt = '1'
        packed = struct.pack('<BII', params.log_n, params.r, params.p)
    return '$rscrypt$%s$%s$%s$%s$' % (fmt, _b64(packed), _b64(salt), _b64(dk))


def decode_hash(stored: str, max_memory: int = DEFAULT_MAX_MEMORY) -> Tuple[ScryptParams, bytes, bytes]:
    fmt, packed, salt, dk = _split(stored, 'rscrypt')
    packed = _unb64(packed)
    if fmt == '0' and len(packed) == 3:
        log_n, r, p = packed
    elif fmt == '1' and len(packed) == 9:
        log_n, r, p = struct.unpack('<BII', packed)
    else:
        raise DecodeError('unknown parameter format %r' % fmt)

    try:
        params = ScryptParams(log_n, r, p, max_memory)
    except InvalidParams as e:
        raise DecodeError('bad embedded parameters: %s' % e) from e

    salt = _unb64(salt)
    dk = _unb64(dk)
    if not dk:
        raise DecodeError('empty hash')
    return params, salt, dk


def create_password_hash(password: Password, params: Optional[ScryptParams] = None) -> str:
    if params is None:
        params = ScryptParams.recommended()
    salt = os.urandom(SALT_LEN)
    key = scrypt(_password_bytes(password), salt, params, DKLEN)
    return encode_hash(params, salt, key)


def verify_password(password: Password, stored_hash: str, max_memory: int = DEFAULT_MAX_MEMORY) -> bool:
    """Check ``password`` against a ``$rscrypt$`` string.

    A malformed string raises DecodeError; a well-formed one that does not
    match returns False. ``max_memory`` caps what the embedded parameters may
    ask for and must be at least the ceiling the hash was created under.
    """
    params, salt, key_stored = decode_hash(stored_hash, max_memory)
    key_test = scrypt(_password_bytes(password), salt, params, len(key_stored))
    # compare_digest walks the full length whatever the first mismatch
    return hmac.compare_digest(key_test, key_stored)


# ---------- pbkdf2 ----------
def encode_pbkdf2_hash(iterations: int, salt: bytes, dk: bytes) -> str:
    return '$rpbkdf2$0$%s$%s$%s$' % (_b64(struct.pack('>I', iterations)), _b64(salt), _b64(dk))


def decode_pbkdf2_hash(stored: str) -> Tuple[int, bytes, bytes]:
    fmt, packed, salt, dk = _split(stored, 'rpbkdf2')
    packed = _unb64(packed)
    if fmt != '0' or len(packed) != 4:
        raise DecodeError('unknown parameter format %r' % fmt)
    iterations, = struct.unpack('>I', packed)
    if iterations == 0:
        raise DecodeError('iteration count must be positive')
    salt = _unb64(salt)
    dk = _unb64(dk)
    if not dk:
        raise DecodeError('empty hash')
    return iterations, salt, dk


def create_pbkdf2_hash(password: Password, iterations: int = PBKDF2_ITERATIONS) -> str:
    salt = os.urandom(SALT_LEN)
    key = pbkdf2_hmac_sha256(_password_bytes(password), salt, iterations, DKLEN)
    return encode_pbkdf2_hash(iterations, salt, key)


def verify_pbkdf2_hash(password: Password, stored_hash: str) -> bool:
    iterations, salt, key_stored = decode_pbkdf2_hash(stored_hash)
    key_test = pbkdf2_hmac_sha256(_password_bytes(password), salt, iterations, len(key_stored))
    return hmac.compare_digest(key_test, key_stored)
