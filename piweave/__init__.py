__all__ = [
    "PiConfig",
    "build_config",
    "factorial",
    "fixed_divide",
    "sqrt_newton",
    "ConvergenceError",
    "expand_term",
    "reduce_terms",
    "compute_coefficient",
    "assemble",
    "compute_pi",
    "compute_pi_parallel",
]

from .chudnovsky import assemble, compute_coefficient, compute_pi, compute_pi_parallel, expand_term, reduce_terms
from .config import PiConfig, build_config
from .fixedpoint import ConvergenceError, factorial, fixed_divide, sqrt_newton
