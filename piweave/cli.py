import logging
import time
from decimal import Decimal, InvalidOperation

import click

from .chudnovsky import compute_coefficient, compute_pi_parallel
from .config import CONVERGENCE_RATE, build_config
from .fixedpoint import fixed_divide, sqrt_newton
from .formats import FORMATS, serialize_result, truncate_fraction
from .verify import VERIFY_METHODS, extract_fractional_digits, verify_fractional_digits


logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _final_filename(stem: str, fmt: str) -> str:
    if stem.lower().endswith("." + fmt):
        return stem
    return f"{stem}.{fmt}"


def _load_config(digits: int, workers):
    try:
        return build_config(digits, workers)
    except ValueError as e:
        raise click.ClickException(str(e))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main():
    pass


@main.command()
@click.option("--digits", default=1000, show_default=True, type=int)
@click.option("--workers", default=None, type=int, help="Worker processes (default: CPU count).")
@click.option("--format", "fmt", type=click.Choice(FORMATS, case_sensitive=False), default="txt", show_default=True)
@click.option("--full/--no-full", default=False, show_default=True, help="Keep the guard digits past --digits.")
@click.option("--verify/--no-verify", default=False, show_default=True)
@click.option("--verify-samples", default=1000, show_default=True, type=int)
@click.option("--verify-method", type=click.Choice(VERIFY_METHODS, case_sensitive=False), default="spigot", show_default=True)
@click.option("--out", "out_path", default="-", show_default=True)
@click.option("-v", "--verbose", is_flag=True)
def compute(
    digits: int,
    workers,
    fmt: str,
    full: bool,
    verify: bool,
    verify_samples: int,
    verify_method: str,
    out_path: str,
    verbose: bool,
):
    _configure_logging(verbose)
    fmt = fmt.lower().strip()
    config = _load_config(digits, workers)
    logger.info(
        "%d digits of pi using a %d term Chudnovsky series converging at %s digits/term",
        config.digits,
        config.series_terms,
        CONVERGENCE_RATE,
    )
    try:
        start = time.perf_counter()
        coefficient = compute_coefficient(config)
        logger.info("Calculating constants took %.6f seconds.", time.perf_counter() - start)
        start = time.perf_counter()
        value = compute_pi_parallel(config, coefficient=coefficient)
        logger.info(
            "Calculating pi concurrently on %d workers took %.6f seconds.",
            config.workers,
            time.perf_counter() - start,
        )
    except ArithmeticError as e:
        raise click.ClickException(f"computation failed: {e}")
    display = value if full else truncate_fraction(value, config.digits)
    if verify:
        samples = min(verify_samples, config.digits)
        ok, kind = verify_fractional_digits(extract_fractional_digits(display), samples, verify_method)
        if not ok:
            raise click.ClickException(f"verification failed ({kind})")
        logger.info("verified %d digits (%s)", samples, kind)
    meta = {
        "digits": config.digits,
        "precision": config.precision,
        "series_terms": config.series_terms,
        "workers": config.workers,
    }
    payload, _ = serialize_result(display, fmt, meta)
    if out_path == "-":
        click.echo(payload, nl=False)
        return
    filename = _final_filename(out_path, fmt)
    with open(filename, "wb") as f:
        f.write(payload)
    click.echo(filename)


@main.command()
@click.option("--digits", default=1000, show_default=True, type=int)
@click.option("--workers", default=None, type=int)
def info(digits: int, workers):
    config = _load_config(digits, workers)
    click.echo(f"digits: {config.digits}")
    click.echo(f"precision: {config.precision}")
    click.echo(f"series terms: {config.series_terms}")
    click.echo(f"convergence rate: {CONVERGENCE_RATE}")
    click.echo(f"workers: {config.workers}")


@main.command()
@click.argument("value")
@click.option("--places", default=50, show_default=True, type=click.IntRange(min=1))
def sqrt(value: str, places: int):
    try:
        radicand = Decimal(value)
    except InvalidOperation:
        raise click.BadParameter("not a decimal number", param_hint="VALUE")
    if not radicand.is_finite():
        raise click.BadParameter("must be finite", param_hint="VALUE")
    try:
        root = sqrt_newton(radicand, Decimal(1).scaleb(-places), 2 * places)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="VALUE")
    except ArithmeticError as e:
        raise click.ClickException(str(e))
    click.echo(format(fixed_divide(root, 1, places), "f"))
