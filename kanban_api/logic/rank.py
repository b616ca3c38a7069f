"""Rank tokens for manually ordered lists.

A rank is an immutable, totally ordered token stored on an item to encode its
position among siblings. Tokens are LexoRank-compatible strings of the form
``B|IIIIII:FFF`` where ``B`` is a bucket digit, ``IIIIII`` a six-digit base-36
integer part and ``FFF`` an optional base-36 fraction without trailing zeros.
Because the integer part has a fixed width, byte-wise comparison of two tokens
agrees with their numeric order, so ``ORDER BY rank`` on a binary-collated
column yields the user-visible order.

All arithmetic is exact: a value is held as ``mag / 36 ** scale`` with Python
integers, so ``between`` never returns one of its inputs; precision grows
instead (see ``RankValue.is_long``).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
import re

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
BASE = len(DIGITS)
INTEGER_WIDTH = 6
BUCKETS = (0, 1, 2)

_TOKEN_RE = re.compile(r"^([0-2])\|([0-9a-z]{6}):([0-9a-z]*)$")


@dataclass(frozen=True)
class _Decimal:
    """Non-negative base-36 fixed-point number, normalized on construction."""

    mag: int
    scale: int

    @classmethod
    def make(cls, mag: int, scale: int) -> "_Decimal":
        if mag == 0:
            return cls(0, 0)
        while scale > 0 and mag % BASE == 0:
            mag //= BASE
            scale -= 1
        return cls(mag, scale)

    def _aligned(self, other: "_Decimal") -> tuple[int, int, int]:
        scale = max(self.scale, other.scale)
        return (
            self.mag * BASE ** (scale - self.scale),
            other.mag * BASE ** (scale - other.scale),
            scale,
        )

    def compare(self, other: "_Decimal") -> int:
        left, right, _ = self._aligned(other)
        return (left > right) - (left < right)

    def add(self, other: "_Decimal") -> "_Decimal":
        left, right, scale = self._aligned(other)
        return _Decimal.make(left + right, scale)

    def subtract(self, other: "_Decimal") -> "_Decimal":
        left, right, scale = self._aligned(other)
        if left < right:
            raise ValueError("rank decimals cannot be negative")
        return _Decimal.make(left - right, scale)

    def multiply(self, other: "_Decimal") -> "_Decimal":
        return _Decimal.make(self.mag * other.mag, self.scale + other.scale)

    def set_scale(self, scale: int, ceiling: bool = False) -> "_Decimal":
        # Truncates extra digits; ceiling always bumps the last kept digit.
        if scale >= self.scale:
            return self
        scale = max(scale, 0)
        mag = self.mag // BASE ** (self.scale - scale)
        if ceiling:
            mag += 1
        return _Decimal.make(mag, scale)

    def floor(self) -> "_Decimal":
        return _Decimal(self.mag // BASE ** self.scale, 0)

    def ceil(self) -> "_Decimal":
        if self.scale == 0:
            return self
        return _Decimal(self.mag // BASE ** self.scale + 1, 0)

    def format(self) -> str:
        unit = BASE ** self.scale
        integer = _to_base36(self.mag // unit).rjust(INTEGER_WIDTH, "0")
        if self.scale == 0:
            return integer + ":"
        fraction = _to_base36(self.mag % unit).rjust(self.scale, "0")
        return f"{integer}:{fraction}"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, BASE)
        out.append(DIGITS[rem])
    return "".join(reversed(out))


MIN_DECIMAL = _Decimal(0, 0)
MAX_DECIMAL = _Decimal(BASE ** INTEGER_WIDTH - 1, 0)
INITIAL_MIN_DECIMAL = _Decimal(int("100000", BASE), 0)
INITIAL_MAX_DECIMAL = _Decimal(int("y00000", BASE), 0)
STEP_DECIMAL = _Decimal(8, 0)
_HALF = _Decimal(BASE // 2, 1)


def _mid(left: _Decimal, right: _Decimal) -> _Decimal:
    mid = left.add(right).multiply(_HALF)
    scale = max(left.scale, right.scale)
    if mid.scale > scale:
        round_down = mid.set_scale(scale, ceiling=False)
        if round_down.compare(left) > 0:
            return round_down
        round_up = mid.set_scale(scale, ceiling=True)
        if round_up.compare(right) < 0:
            return round_up
    return mid


def _check_mid(lbound: _Decimal, rbound: _Decimal, mid: _Decimal) -> _Decimal:
    if lbound.compare(mid) >= 0 or mid.compare(rbound) >= 0:
        return _mid(lbound, rbound)
    return mid


def _between(o_left: _Decimal, o_right: _Decimal) -> _Decimal:
    """Return the shortest convenient decimal strictly inside (o_left, o_right)."""
    left, right = o_left, o_right
    if o_left.scale < o_right.scale:
        n_right = o_right.set_scale(o_left.scale, ceiling=False)
        if o_left.compare(n_right) >= 0:
            return _mid(o_left, o_right)
        right = n_right
    if o_left.scale > right.scale:
        n_left = o_left.set_scale(right.scale, ceiling=True)
        if n_left.compare(right) >= 0:
            return _mid(o_left, o_right)
        left = n_left

    # Coarsen both ends while they stay ordered.
    scale = left.scale
    while scale > 0:
        n_scale = scale - 1
        n_left = left.set_scale(n_scale, ceiling=True)
        n_right = right.set_scale(n_scale, ceiling=False)
        cmp = n_left.compare(n_right)
        if cmp == 0:
            return _check_mid(o_left, o_right, n_left)
        if cmp > 0:
            break
        scale = n_scale
        left = n_left
        right = n_right

    mid = _check_mid(o_left, o_right, _mid(left, right))
    m_scale = mid.scale
    while m_scale > 0:
        n_scale = m_scale - 1
        n_mid = mid.set_scale(n_scale)
        if o_left.compare(n_mid) >= 0 or n_mid.compare(o_right) >= 0:
            break
        mid = n_mid
        m_scale = n_scale
    return mid


@total_ordering
@dataclass(frozen=True)
class RankValue:
    """Immutable rank token. Compare, hash and serialize freely."""

    bucket: int
    decimal: _Decimal

    def __post_init__(self) -> None:
        if self.bucket not in BUCKETS:
            raise ValueError(f"rank bucket must be one of {BUCKETS}, got {self.bucket!r}")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RankValue):
            return NotImplemented
        if self.bucket != other.bucket:
            return self.bucket < other.bucket
        return self.decimal.compare(other.decimal) < 0

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"RankValue({self.format()!r})"

    def format(self) -> str:
        return f"{self.bucket}|{self.decimal.format()}"

    def is_min(self) -> bool:
        return self.decimal == MIN_DECIMAL

    def is_max(self) -> bool:
        return self.decimal == MAX_DECIMAL

    def is_long(self, max_length: int) -> bool:
        """True when the serialized token is longer than ``max_length``."""
        return len(self.format()) > max_length

    def in_next_bucket(self) -> "RankValue":
        return RankValue(BUCKETS[(self.bucket + 1) % len(BUCKETS)], self.decimal)


def parse(token: str) -> RankValue:
    """Parse a serialized rank token, raising ``ValueError`` when malformed."""
    m = _TOKEN_RE.match(str(token or ""))
    if not m:
        raise ValueError(f"invalid rank token: {token!r}")
    bucket, integer, fraction = m.groups()
    mag = int(integer, BASE)
    if fraction:
        mag = mag * BASE ** len(fraction) + int(fraction, BASE)
    return RankValue(int(bucket), _Decimal.make(mag, len(fraction)))


def middle(bucket: int = 0) -> RankValue:
    """Canonical starting rank, halfway through the bucket (``0|hzzzzz:``)."""
    return RankValue(bucket, _between(MIN_DECIMAL, MAX_DECIMAL))


def gen_next(rank: RankValue) -> RankValue:
    """Return a rank strictly after ``rank`` that leaves room behind it."""
    if rank.is_min():
        return RankValue(rank.bucket, INITIAL_MIN_DECIMAL)
    candidate = rank.decimal.ceil().add(STEP_DECIMAL)
    if candidate.compare(MAX_DECIMAL) >= 0:
        if rank.is_max():
            raise ValueError(f"rank {rank} cannot be increased")
        candidate = _between(rank.decimal, MAX_DECIMAL)
    return RankValue(rank.bucket, candidate)


def gen_prev(rank: RankValue) -> RankValue:
    """Return a rank strictly before ``rank`` that leaves room ahead of it."""
    if rank.is_max():
        return RankValue(rank.bucket, INITIAL_MAX_DECIMAL)
    floor = rank.decimal.floor()
    if floor.compare(STEP_DECIMAL) <= 0:
        candidate = MIN_DECIMAL
    else:
        candidate = floor.subtract(STEP_DECIMAL)
    if candidate.compare(MIN_DECIMAL) <= 0:
        if rank.is_min():
            raise ValueError(f"rank {rank} cannot be decreased")
        candidate = _between(MIN_DECIMAL, rank.decimal)
    return RankValue(rank.bucket, candidate)


def between(left: RankValue, right: RankValue) -> RankValue:
    """Return a rank strictly greater than ``left`` and strictly less than ``right``.

    Requires ``left < right`` within one bucket; anything else is a programming
    error on the caller's side and raises ``ValueError``.
    """
    if left.bucket != right.bucket:
        raise ValueError(f"cannot rank between buckets {left.bucket} and {right.bucket}")
    if not left < right:
        raise ValueError(f"between() requires left < right, got {left} and {right}")
    return RankValue(left.bucket, _between(left.decimal, right.decimal))


def spread(count: int, bucket: int = 0) -> list[RankValue]:
    """Return ``count`` ascending integer ranks spaced evenly across a bucket."""
    if count < 0:
        raise ValueError("count must be non-negative")
    step = MAX_DECIMAL.mag // (count + 1)
    if count and step < 1:
        raise ValueError(f"bucket cannot hold {count} distinct integer ranks")
    return [RankValue(bucket, _Decimal(step * (i + 1), 0)) for i in range(count)]


__all__ = [
    "RankValue",
    "between",
    "gen_next",
    "gen_prev",
    "middle",
    "parse",
    "spread",
]
