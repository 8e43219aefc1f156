from dataclasses import dataclass, field

from .errors import InvalidParams

# 32 MiB
DEFAULT_MAX_MEMORY = 32 * 1024 * 1024

MAX_RP = 1 << 30
MAX_U32 = 0xffffffff


@dataclass(frozen=True)
class ScryptParams:
    """scrypt cost parameters: N = 2**log_n, block size factor r, lanes p.

    Every check runs at construction time, before any buffer is allocated,
    so a ScryptParams instance is always safe to hand to scrypt().
    """

    log_n: int
    r: int
    p: int
    max_memory: int = field(default=DEFAULT_MAX_MEMORY, compare=False, repr=False)

    def __post_init__(self):
        log_n, r, p = self.log_n, self.r, self.p
        if not 1 <= log_n < 64:
            raise InvalidParams('log_n must be between 1 and 63, got %d' % log_n)
        if not 1 <= r <= MAX_U32:
            raise InvalidParams('r must be between 1 and 2^32-1, got %d' % r)
        if not 1 <= p <= MAX_U32:
            raise InvalidParams('p must be between 1 and 2^32-1, got %d' % p)
        # N < 2^(128 * r / 8)
        if log_n >= r * 16:
            raise InvalidParams('N must be less than 2^(16*r)')
        if r * p >= MAX_RP:
            raise InvalidParams('r*p must be < 2^30')
        if self.memory_required > self.max_memory:
            raise InvalidParams('parameters need %d bytes, more than the %d byte limit'
                                % (self.memory_required, self.max_memory))

    @property
    def n(self) -> int:
        return 1 << self.log_n

    @property
    def memory_required(self) -> int:
        return 128 * self.r * (self.n + self.p)

    @classmethod
    def from_n(cls, n: int, r: int, p: int, max_memory: int = DEFAULT_MAX_MEMORY) -> 'ScryptParams':
        if n <= 1 or n & (n - 1) != 0:
            raise InvalidParams('N must be > 1 and a power of 2, got %d' % n)
        return cls(n.bit_length() - 1, r, p, max_memory)

    @classmethod
    def recommended(cls) -> 'ScryptParams':
        return cls(14, 8, 1)
