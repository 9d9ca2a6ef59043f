import math
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


# Digits gained per additional Chudnovsky term: log10(640320**3 / (12**3 * 8)).
CONVERGENCE_RATE = math.log10(151931373056000)

# "3." plus the eight leading fractional zeros of 1 / (426880 * sqrt(10005)).
LEADING_DIGIT_ALLOWANCE = 10


def compute_precision(digits: int) -> int:
    return int(digits) + LEADING_DIGIT_ALLOWANCE


def series_length(digits: int) -> int:
    return int(math.ceil(int(digits) / CONVERGENCE_RATE))


def default_workers() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class PiConfig:
    digits: int
    precision: int
    series_terms: int
    workers: int

    def indices(self) -> range:
        return range(self.series_terms + 1)

    def sqrt_target(self) -> Decimal:
        return Decimal(1).scaleb(-self.precision)

    def sqrt_places(self) -> int:
        return 2 * self.precision


def build_config(digits: int, workers: Optional[int] = None) -> PiConfig:
    digits = int(digits)
    if digits < 1:
        raise ValueError("digits must be >= 1")
    if workers is None:
        workers = default_workers()
    workers = int(workers)
    if workers < 1:
        raise ValueError("workers must be >= 1")
    return PiConfig(
        digits=digits,
        precision=compute_precision(digits),
        series_terms=series_length(digits),
        workers=workers,
    )
