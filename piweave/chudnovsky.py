import logging
from concurrent.futures import ALL_COMPLETED, Executor, ProcessPoolExecutor, wait
from decimal import Decimal, localcontext
from functools import partial
from typing import Iterable, List, Optional

from .config import PiConfig, default_workers
from .fixedpoint import arithmetic_context, factorial, fixed_divide, sqrt_newton


logger = logging.getLogger(__name__)

_A = 13591409
_B = 545140134
_C3 = 640320**3
_SCALE = 426880
_RADICAND = 10005


def expand_term(k: int, precision: int) -> Decimal:
    k = int(k)
    if k < 0:
        raise ValueError("k must be >= 0")
    sign = -1 if k % 2 else 1
    with localcontext(arithmetic_context()):
        numerator = sign * factorial(6 * k) * (_A + _B * k)
        k_fact = factorial(k)
        denominator = factorial(3 * k) * (k_fact * k_fact * k_fact) * Decimal(_C3**k)
    return fixed_divide(numerator, denominator, precision)


def _gather(executor: Executor, fn, indices: List[int]) -> List[Decimal]:
    futures = [executor.submit(fn, k) for k in indices]
    wait(futures, return_when=ALL_COMPLETED)
    return [f.result() for f in futures]


def reduce_terms(
    indices: Iterable[int],
    precision: int,
    workers: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> Decimal:
    indices = list(indices)
    expand = partial(expand_term, precision=precision)
    if executor is None:
        workers = default_workers() if workers is None else int(workers)
        if workers < 1:
            raise ValueError("workers must be >= 1")
        logger.debug("expanding %d terms on %d workers", len(indices), workers)
        with ProcessPoolExecutor(max_workers=workers) as ex:
            terms = _gather(ex, expand, indices)
    else:
        logger.debug("expanding %d terms on supplied executor", len(indices))
        terms = _gather(executor, expand, indices)
    with localcontext(arithmetic_context()):
        total = sum(terms, Decimal(0))
    return total


def compute_coefficient(config: PiConfig) -> Decimal:
    root = sqrt_newton(_RADICAND, config.sqrt_target(), config.sqrt_places())
    with localcontext(arithmetic_context()):
        scaled = _SCALE * root
    return fixed_divide(1, scaled, config.precision)


def assemble(coefficient: Decimal, series_total: Decimal, precision: int) -> Decimal:
    with localcontext(arithmetic_context()):
        combined = coefficient * series_total
    return fixed_divide(1, combined, precision)


def compute_pi(
    config: PiConfig,
    coefficient: Optional[Decimal] = None,
    executor: Optional[Executor] = None,
) -> Decimal:
    if coefficient is None:
        coefficient = compute_coefficient(config)
    total = reduce_terms(config.indices(), config.precision, workers=config.workers, executor=executor)
    return assemble(coefficient, total, config.precision)


def compute_pi_parallel(
    config: PiConfig,
    coefficient: Optional[Decimal] = None,
    executor: Optional[Executor] = None,
) -> str:
    return format(compute_pi(config, coefficient=coefficient, executor=executor), "f")
