import logging
import math
import struct
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .errors import InvalidParams, OutputLengthError
from .prf import HmacPrf

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 0xffffffff
MAX_BLOCKS = 0xffffffff


def pbkdf2(prf_kind: str, password: bytes, salt: bytes, iterations: int,
           output_len: int, workers: Optional[int] = None) -> bytes:
    """PBKDF2 (RFC 8018) with HMAC over the named hashlib digest.

    When ``workers`` is greater than one the output blocks are spread over a
    thread pool; they are joined by block index, so the result is identical to
    the sequential computation. The HMAC chain runs under the GIL, so this
    only overlaps work where hashlib releases it; it mirrors the
    per-block fan-out of scrypt lanes rather than promising a speed-up.
    """
    if not 1 <= iterations <= MAX_ITERATIONS:
        raise InvalidParams('iterations must be between 1 and 2^32-1, got %d' % iterations)

    prf = HmacPrf(prf_kind, password)
    hlen = prf.output_size

    if not 1 <= output_len <= MAX_BLOCKS * hlen:
        raise OutputLengthError('output length must be between 1 and (2^32-1)*%d, got %d'
                                % (hlen, output_len))

    salt = bytes(salt)
    l = math.ceil(output_len / hlen)

    def F(block_index: int) -> bytes:
        U = prf(salt + struct.pack('>I', block_index))
        T = int.from_bytes(U, 'big')
        for _ in range(1, iterations):
            U = prf(U)
            T ^= int.from_bytes(U, 'big')
        return T.to_bytes(hlen, 'big')

    if workers is not None and workers > 1 and l > 1:
        logger.debug('pbkdf2: %d blocks of %s on %d threads', l, prf_kind, workers)
        with ThreadPoolExecutor(max_workers=min(workers, l)) as pool:
            blocks = list(pool.map(F, range(1, l + 1)))
    else:
        blocks = [F(i) for i in range(1, l + 1)]

    DK = b''.join(blocks)
    return DK[:output_len]


def pbkdf2_hmac_sha256(password: bytes, salt: bytes, iterations: int, dklen: int) -> bytes:
    return pbkdf2('sha256', password, salt, iterations, dklen)
