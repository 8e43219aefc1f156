import hashlib

from .errors import InvalidParams


class HmacPrf:
    """HMAC keyed once, over any hashlib digest.

    The padded key is absorbed into an inner and an outer hash state up front,
    so every call only copies those states and finalises them.
    """

    def __init__(self, kind: str, key: bytes):
        try:
            probe = hashlib.new(kind)
        except (ValueError, TypeError) as e:
            raise InvalidParams('unsupported PRF digest: %r' % (kind,)) from e
        if probe.digest_size == 0:
            # variable-length digests (shake_*) have no fixed PRF output
            raise InvalidParams('unsupported PRF digest: %r' % (kind,))

        self.kind = kind
        self.output_size = probe.digest_size
        block_size = probe.block_size

        key = bytes(key)
        if len(key) > block_size:
            key = hashlib.new(kind, key).digest()
        if len(key) < block_size:
            key = key + b"\x00" * (block_size - len(key))

        ipad = bytes((x ^ 0x36) for x in key)
        opad = bytes((x ^ 0x5c) for x in key)

        self._inner = hashlib.new(kind, ipad)
        self._outer = hashlib.new(kind, opad)

    def __call__(self, message: bytes) -> bytes:
        inner = self._inner.copy()
        inner.update(message)
        outer = self._outer.copy()
        outer.update(inner.digest())
        return outer.digest()


def hmac_sha256(key: bytes, message: bytes) -> bytes:
    return HmacPrf('sha256', key)(message)
