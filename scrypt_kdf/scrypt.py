import logging
import time
from concurrent.futures import ProcessPoolExecutor
from itertools import repeat
from typing import Optional

from .errors import InvalidParams, OutputLengthError
from .params import DEFAULT_MAX_MEMORY, ScryptParams
from .pbkdf2 import pbkdf2_hmac_sha256
from .romix import ro_mix

logger = logging.getLogger(__name__)

# PBKDF2-HMAC-SHA256 limit
MAX_DKLEN = 0xffffffff * 32


def scrypt(password: bytes, salt: bytes, params: ScryptParams, dklen: int,
           workers: Optional[int] = None) -> bytes:
    """scrypt (RFC 7914) with the pure-Python ROMix.

    ``workers`` > 1 runs the p lanes in a process pool. Lanes are written
    back by position so the output does not depend on completion order.
    Every worker holds its own V table, so the pool must fit in
    ``params.max_memory`` as well; otherwise InvalidParams is raised before
    anything is derived.
    """
    if not 0 < dklen <= MAX_DKLEN:
        raise OutputLengthError('dklen must be between 1 and (2^32-1)*32, got %d' % dklen)

    n, r, p = params.n, params.r, params.p
    lane_len = 128 * r
    parallel = workers is not None and workers > 1 and p > 1
    if parallel:
        workers = min(workers, p)
        needed = workers * lane_len * n + lane_len * p
        if needed > params.max_memory:
            raise InvalidParams('%d workers need %d bytes, more than the %d byte limit'
                                % (workers, needed, params.max_memory))

    started = time.perf_counter()

    B = pbkdf2_hmac_sha256(password, salt, iterations=1, dklen=p * lane_len)
    lanes = [B[i * lane_len:(i + 1) * lane_len] for i in range(p)]

    if parallel:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            lanes = list(pool.map(ro_mix, lanes, repeat(n)))
    else:
        lanes = [ro_mix(lane, n) for lane in lanes]

    B_final = b''.join(lanes)
    dk = pbkdf2_hmac_sha256(password, B_final, iterations=1, dklen=dklen)

    logger.debug('scrypt log_n=%d r=%d p=%d dklen=%d took %.3fs',
                 params.log_n, r, p, dklen, time.perf_counter() - started)
    return dk


def scrypt_kdf(password: bytes, salt: bytes, log_n: int, r: int, p: int, dklen: int,
               max_memory: int = DEFAULT_MAX_MEMORY) -> bytes:
    """High-level scrypt KDF taking the raw cost parameters.
    Returns dklen bytes.
    """
    return scrypt(password, salt, ScryptParams(log_n, r, p, max_memory), dklen)
