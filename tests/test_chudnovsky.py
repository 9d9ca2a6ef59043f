import random
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal, localcontext

import pytest
from mpmath import mp

from piweave.chudnovsky import (
    assemble,
    compute_coefficient,
    compute_pi,
    compute_pi_parallel,
    expand_term,
    reduce_terms,
)
from piweave.config import build_config, default_workers
from piweave.fixedpoint import arithmetic_context


PI_100 = (
    "3.1415926535897932384626433832795028841971693993751058209749445923078164062862089986280348253421170679"
)


def test_first_term_is_constant():
    assert expand_term(0, 10) == 13591409
    assert expand_term(0, 10).as_tuple().exponent == -10


def test_second_term_value():
    term = expand_term(1, 40)
    expected = Decimal(-720 * 558731543) / Decimal(6 * 262537412640768000)
    assert term < 0
    assert abs(term - expected) < Decimal("1e-25")


def test_term_sign_follows_parity():
    for k in range(0, 10):
        term = expand_term(k, 200)
        if k % 2:
            assert term < 0
        else:
            assert term > 0


def test_term_rejects_negative_index():
    with pytest.raises(ValueError):
        expand_term(-1, 10)


def test_coefficient_matches_mpmath():
    config = build_config(20, workers=1)
    coefficient = compute_coefficient(config)
    with mp.workdps(60):
        expected = Decimal(mp.nstr(mp.mpf(1) / (426880 * mp.sqrt(10005)), 50))
    assert coefficient.as_tuple().exponent == -config.precision
    assert abs(coefficient - expected) < Decimal("1e-29")


def test_reduce_is_order_independent():
    precision = 60
    indices = list(range(6))
    shuffled = list(indices)
    random.Random(7).shuffle(shuffled)
    with ThreadPoolExecutor(max_workers=3) as ex:
        forward = reduce_terms(indices, precision, executor=ex)
        backward = reduce_terms(list(reversed(indices)), precision, executor=ex)
        mixed = reduce_terms(shuffled, precision, executor=ex)
    assert forward == backward == mixed


def test_reduce_matches_sequential_sum():
    precision = 40
    with localcontext(arithmetic_context()):
        expected = sum((expand_term(k, precision) for k in range(4)), Decimal(0))
    with ThreadPoolExecutor(max_workers=2) as ex:
        assert reduce_terms(range(4), precision, executor=ex) == expected


def test_reduce_fails_when_a_term_fails():
    with ThreadPoolExecutor(max_workers=2) as ex:
        with pytest.raises(ValueError):
            reduce_terms([0, 1, -1, 2], 20, executor=ex)


def test_reduce_rejects_bad_worker_count():
    with pytest.raises(ValueError):
        reduce_terms([0], 10, workers=-1)


def test_assemble_inverts_product():
    result = assemble(Decimal("0.5"), Decimal("0.25"), 4)
    assert result == Decimal("8.0000")


def test_two_digits():
    config = build_config(2, workers=1)
    value = compute_pi_parallel(config)
    assert config.series_terms == 1
    assert value.startswith("3.14")


def test_ten_digits():
    value = compute_pi_parallel(build_config(10, workers=1))
    assert value.startswith("3.1415926535")
    assert "e" not in value.lower()
    assert len(value.split(".", 1)[1]) == build_config(10).precision


def test_hundred_digits_with_thread_pool():
    config = build_config(100, workers=4)
    with ThreadPoolExecutor(max_workers=4) as ex:
        value = compute_pi_parallel(config, executor=ex)
    assert value[:102] == PI_100


def test_leading_digits_stable_across_digit_counts():
    short = compute_pi_parallel(build_config(30, workers=1))
    long = compute_pi_parallel(build_config(50, workers=1))
    assert short[:32] == long[:32] == PI_100[:32]


def test_worker_count_does_not_change_result():
    single = compute_pi_parallel(build_config(60, workers=1))
    many = compute_pi_parallel(build_config(60, workers=default_workers()))
    assert single == many


def test_precomputed_coefficient_is_reused():
    config = build_config(30, workers=1)
    coefficient = compute_coefficient(config)
    with ThreadPoolExecutor(max_workers=2) as ex:
        assert compute_pi(config, coefficient=coefficient, executor=ex) == compute_pi(config, executor=ex)
