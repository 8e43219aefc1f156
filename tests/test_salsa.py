import struct

import pytest

from scrypt_kdf.salsa import salsa20_8, salsa20_8_words

# RFC 7914, section 8
INPUT = bytes.fromhex(
    '7e879a214f3ec9867ca940e641718f26baee555b8c61c1b50df846116dcd3b1d'
    'ee24f319df9b3d8514121e4b5ac5aa3276021d2909c74829edebc68db8b8c25e')
OUTPUT = bytes.fromhex(
    'a41f859c6608cc993b81cacb020cef05044b2181a2fd337dfd7b1c6396682f29'
    'b4393168e3c9e6bcfe6bc5b7a06d96bae424cc102c91745c24ad673dc7618f81')


def test_rfc7914_vector():
    assert salsa20_8(INPUT) == OUTPUT


def test_word_form():
    words = salsa20_8_words(struct.unpack('<16I', INPUT))
    assert struct.pack('<16I', *words) == OUTPUT
    assert all(0 <= w <= 0xffffffff for w in words)


def test_zero_block_is_fixed_point():
    assert salsa20_8(bytes(64)) == bytes(64)


@pytest.mark.parametrize('length', [0, 63, 65, 128])
def test_wrong_length(length):
    with pytest.raises(ValueError):
        salsa20_8(bytes(length))
