import struct
from typing import List, Sequence

MASK32 = 0xffffffff

_block = struct.Struct('<16I')


def salsa20_8_words(B: Sequence[int]) -> List[int]:
    """Salsa20/8 core over 16 uint32 words.

    Four double rounds (column round then row round) followed by adding the
    input words back in. The quarter rounds are written out on locals; every
    sum is masked before rotating.
    """
    x0, x1, x2, x3, x4, x5, x6, x7, x8, x9, x10, x11, x12, x13, x14, x15 = B

    for _ in range(4):
        # columns
        t = (x0 + x12) & MASK32; x4 ^= ((t << 7) & MASK32) | (t >> 25)
        t = (x4 + x0) & MASK32; x8 ^= ((t << 9) & MASK32) | (t >> 23)
        t = (x8 + x4) & MASK32; x12 ^= ((t << 13) & MASK32) | (t >> 19)
        t = (x12 + x8) & MASK32; x0 ^= ((t << 18) & MASK32) | (t >> 14)

        t = (x5 + x1) & MASK32; x9 ^= ((t << 7) & MASK32) | (t >> 25)
        t = (x9 + x5) & MASK32; x13 ^= ((t << 9) & MASK32) | (t >> 23)
        t = (x13 + x9) & MASK32; x1 ^= ((t << 13) & MASK32) | (t >> 19)
        t = (x1 + x13) & MASK32; x5 ^= ((t << 18) & MASK32) | (t >> 14)

        t = (x10 + x6) & MASK32; x14 ^= ((t << 7) & MASK32) | (t >> 25)
        t = (x14 + x10) & MASK32; x2 ^= ((t << 9) & MASK32) | (t >> 23)
        t = (x2 + x14) & MASK32; x6 ^= ((t << 13) & MASK32) | (t >> 19)
        t = (x6 + x2) & MASK32; x10 ^= ((t << 18) & MASK32) | (t >> 14)

        t = (x15 + x11) & MASK32; x3 ^= ((t << 7) & MASK32) | (t >> 25)
        t = (x3 + x15) & MASK32; x7 ^= ((t << 9) & MASK32) | (t >> 23)
        t = (x7 + x3) & MASK32; x11 ^= ((t << 13) & MASK32) | (t >> 19)
        t = (x11 + x7) & MASK32; x15 ^= ((t << 18) & MASK32) | (t >> 14)

        # rows
        t = (x0 + x3) & MASK32; x1 ^= ((t << 7) & MASK32) | (t >> 25)
        t = (x1 + x0) & MASK32; x2 ^= ((t << 9) & MASK32) | (t >> 23)
        t = (x2 + x1) & MASK32; x3 ^= ((t << 13) & MASK32) | (t >> 19)
        t = (x3 + x2) & MASK32; x0 ^= ((t << 18) & MASK32) | (t >> 14)

        t = (x5 + x4) & MASK32; x6 ^= ((t << 7) & MASK32) | (t >> 25)
        t = (x6 + x5) & MASK32; x7 ^= ((t << 9) & MASK32) | (t >> 23)
        t = (x7 + x6) & MASK32; x4 ^= ((t << 13) & MASK32) | (t >> 19)
        t = (x4 + x7) & MASK32; x5 ^= ((t << 18) & MASK32) | (t >> 14)

        t = (x10 + x9) & MASK32; x11 ^= ((t << 7) & MASK32) | (t >> 25)
        t = (x11 + x10) & MASK32; x8 ^= ((t << 9) & MASK32) | (t >> 23)
        t = (x8 + x11) & MASK32; x9 ^= ((t << 13) & MASK32) | (t >> 19)
        t = (x9 + x8) & MASK32; x10 ^= ((t << 18) & MASK32) | (t >> 14)

        t = (x15 + x14) & MASK32; x12 ^= ((t << 7) & MASK32) | (t >> 25)
        t = (x12 + x15) & MASK32; x13 ^= ((t << 9) & MASK32) | (t >> 23)
        t = (x13 + x12) & MASK32; x14 ^= ((t << 13) & MASK32) | (t >> 19)
        t = (x14 + x13) & MASK32; x15 ^= ((t << 18) & MASK32) | (t >> 14)

    return [
        (x0 + B[0]) & MASK32, (x1 + B[1]) & MASK32, (x2 + B[2]) & MASK32, (x3 + B[3]) & MASK32,
        (x4 + B[4]) & MASK32, (x5 + B[5]) & MASK32, (x6 + B[6]) & MASK32, (x7 + B[7]) & MASK32,
        (x8 + B[8]) & MASK32, (x9 + B[9]) & MASK32, (x10 + B[10]) & MASK32, (x11 + B[11]) & MASK32,
        (x12 + B[12]) & MASK32, (x13 + B[13]) & MASK32, (x14 + B[14]) & MASK32, (x15 + B[15]) & MASK32,
    ]


def salsa20_8(B: bytes) -> bytes:
    """Salsa20/8 core. B is 64 bytes, returns 64-byte transformed block."""
    if len(B) != 64:
        raise ValueError('Salsa20/8 requires 64-byte input')
    return _block.pack(*salsa20_8_words(_block.unpack(B)))
