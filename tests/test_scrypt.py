import hashlib

import pytest

from scrypt_kdf import romix
from scrypt_kdf.errors import InvalidParams, OutputLengthError
from scrypt_kdf.params import ScryptParams
from scrypt_kdf.scrypt import MAX_DKLEN, scrypt, scrypt_kdf

needs_openssl_scrypt = pytest.mark.skipif(not hasattr(hashlib, 'scrypt'),
                                          reason='hashlib.scrypt not available')


def test_rfc7914_empty_vector():
    dk = scrypt(b'', b'', ScryptParams(4, 1, 1), 64)
    assert dk.hex() == (
        '77d6576238657b203b19ca42c18a0497f16b4844e3074ae8dfdffa3fede21442'
        'fcd0069ded0948f8326a753a0fc81f17e8d3e0fb2e0d3628cf35e20c38d18906')


@pytest.mark.slow
def test_rfc7914_nacl_vector():
    dk = scrypt_kdf(b'password', b'NaCl', 10, 8, 16, 64)
    assert dk.hex() == (
        'fdbabe1c9d3472007856e7190d01e9fe7c6ad7cbc8237830e77376634b373162'
        '2eaf30d92e22a3886ff109279d9830dac727afb94a83ee6d8360cbdfa2cc0640')


@needs_openssl_scrypt
@pytest.mark.parametrize('log_n, r, p, dklen', [
    (1, 1, 1, 1),
    (3, 2, 3, 31),
    (5, 1, 2, 33),
    (4, 3, 1, 100),
])
def test_matches_hashlib(log_n, r, p, dklen):
    expected = hashlib.scrypt(b'pleaseletmein', salt=b'SodiumChloride', n=1 << log_n, r=r, p=p, dklen=dklen)
    assert scrypt(b'pleaseletmein', b'SodiumChloride', ScryptParams(log_n, r, p), dklen) == expected


def test_deterministic():
    params = ScryptParams(3, 2, 2)
    assert scrypt(b'pw', b'salt', params, 48) == scrypt(b'pw', b'salt', params, 48)
    assert scrypt(b'pw', b'salt', params, 48) != scrypt(b'pw', b'tlas', params, 48)


def test_parallel_lanes_match_sequential():
    params = ScryptParams(3, 1, 4)
    assert scrypt(b'pw', b'salt', params, 32, workers=2) == scrypt(b'pw', b'salt', params, 32)


@pytest.mark.parametrize('dklen', [0, -1, MAX_DKLEN + 1])
def test_bad_output_length(dklen):
    with pytest.raises(OutputLengthError):
        scrypt(b'pw', b'salt', ScryptParams(2, 1, 1), dklen)


@pytest.mark.parametrize('log_n, r, p', [(0, 1, 1), (4, 1 << 15, 1 << 15), (24, 8, 1)])
def test_invalid_params_never_allocate(monkeypatch, log_n, r, p):
    def forbidden(*args):
        raise AssertionError('scratch table allocated')

    monkeypatch.setattr(romix, 'scratch_table', forbidden)
    with pytest.raises(InvalidParams):
        scrypt_kdf(b'pw', b'salt', log_n, r, p, 32)


def test_worker_tables_must_fit_memory_ceiling(monkeypatch):
    def forbidden(*args):
        raise AssertionError('scratch table allocated')

    monkeypatch.setattr(romix, 'scratch_table', forbidden)
    params = ScryptParams(10, 8, 4, max_memory=2 * 1024 * 1024)
    with pytest.raises(InvalidParams):
        scrypt(b'pw', b'salt', params, 32, workers=4)


def test_worker_count_capped_by_lanes():
    # two lanes: 2 * 128 * 8 bytes of tables plus 2 * 128 of lanes
    params = ScryptParams(3, 1, 2, max_memory=2304)
    assert scrypt(b'pw', b'salt', params, 32, workers=8) == scrypt(b'pw', b'salt', params, 32)
