from typing import Tuple

from .reference import mpmath_fractional_digits, spigot_fractional_digits


VERIFY_METHODS = ("spigot", "mpmath")


def extract_fractional_digits(display: str) -> str:
    if "." not in display:
        return ""
    return display.split(".", 1)[1]


def verify_fractional_digits(fractional_digits: str, samples: int, method: str = "spigot") -> Tuple[bool, str]:
    samples = int(samples)
    method = (method or "spigot").lower().strip()
    if method not in VERIFY_METHODS:
        raise ValueError("unsupported verify method")
    if samples <= 0:
        return True, "verification skipped"
    count = min(samples, len(fractional_digits))
    if method == "spigot":
        expected = spigot_fractional_digits(count)
    else:
        expected = mpmath_fractional_digits(count)
    actual = fractional_digits[:count]
    return expected == actual, f"pi {method}"
