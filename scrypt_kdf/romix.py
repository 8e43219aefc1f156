import logging
import struct
from array import array
from contextlib import contextmanager
from typing import List, Sequence

from .errors import AllocationFailure, InvalidParams
from .salsa import salsa20_8_words

logger = logging.getLogger(__name__)

# one Salsa20/8 block
BLOCK_BYTES = 64
BLOCK_WORDS = 16

_WIPE_CHUNK = 1 << 20


def _check_block_len(length: int) -> int:
    if length == 0 or length % (2 * BLOCK_BYTES) != 0:
        raise ValueError('Block size mismatch: %d is not a positive multiple of 128' % length)
    return length // (2 * BLOCK_BYTES)


def _load(B: bytes) -> List[int]:
    return list(struct.unpack('<%dI' % (len(B) // 4), B))


def _store(words: Sequence[int]) -> bytes:
    return struct.pack('<%dI' % len(words), *words)


def block_mix_words(B: Sequence[int], r: int) -> List[int]:
    """BlockMix over 32*r words, returning a new list.

    Y[i] = salsa(Y[i-1] xor B[i]) with Y[-1] = B[2r-1]; the result is
    (Y[0], Y[2], ..., Y[2r-2], Y[1], Y[3], ..., Y[2r-1]).
    """
    out = [0] * (2 * r * BLOCK_WORDS)
    X = B[-BLOCK_WORDS:]
    for i in range(2 * r):
        offset = i * BLOCK_WORDS
        X = salsa20_8_words([a ^ b for a, b in zip(X, B[offset:offset + BLOCK_WORDS])])
        dest = (i // 2 + (0 if (i % 2 == 0) else r)) * BLOCK_WORDS
        out[dest:dest + BLOCK_WORDS] = X
    return out


def block_mix(B: bytes) -> bytes:
    """BlockMix using Salsa20/8. B length = 128 * r bytes."""
    r = _check_block_len(len(B))
    return _store(block_mix_words(_load(B), r))


def integerify(X: Sequence[int], r: int) -> int:
    """First 8 bytes of the last 64-byte block, as a little-endian integer."""
    offset = (2 * r - 1) * BLOCK_WORDS
    return X[offset] | (X[offset + 1] << 32)


@contextmanager
def scratch_table(n: int, words: int):
    """Yield the V table: ``n`` slots of ``words`` uint32 in one buffer.

    The backing bytearray is zeroed when the block exits, whichever way it
    exits.
    """
    size = n * words * 4
    try:
        buf = bytearray(size)
    except MemoryError as e:
        raise AllocationFailure('cannot allocate %d bytes for the scrypt scratch table' % size) from e

    view = memoryview(buf)
    try:
        yield view.cast('I')
    finally:
        for start in range(0, size, _WIPE_CHUNK):
            end = min(start + _WIPE_CHUNK, size)
            view[start:end] = bytes(end - start)


def ro_mix_words(B: Sequence[int], n: int, r: int) -> List[int]:
    words = 2 * r * BLOCK_WORDS
    mask = n - 1
    X = list(B)
    with scratch_table(n, words) as V:
        for i in range(n):
            V[i * words:(i + 1) * words] = array('I', X)
            X = block_mix_words(X, r)
        for _ in range(n):
            j = integerify(X, r) & mask
            Vj = V[j * words:(j + 1) * words]
            X = block_mix_words([a ^ b for a, b in zip(X, Vj)], r)
    return X


def ro_mix(B: bytes, n: int) -> bytes:
    """ROMix per scrypt. B is 128*r bytes. Returns transformed B."""
    r = _check_block_len(len(B))
    if n <= 1 or n & (n - 1) != 0:
        raise InvalidParams('N must be > 1 and a power of 2')
    logger.debug('ro_mix: n=%d r=%d, %d byte table', n, r, n * 128 * r)
    return _store(ro_mix_words(_load(B), n, r))
