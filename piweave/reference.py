from mpmath import mp


def spigot_fractional_digits(count: int) -> str:
    count = int(count)
    if count < 0:
        raise ValueError("count must be >= 0")
    # Gibbons' streaming state; the leading "3" is emitted and dropped first.
    q, r, t, k, digit, radix = 1, 0, 1, 1, 3, 3
    emitted = []
    skip_integer = True
    while len(emitted) < count:
        if 4 * q + r - t < digit * t:
            if skip_integer:
                skip_integer = False
            else:
                emitted.append(str(digit))
            q, r, digit = 10 * q, 10 * (r - digit * t), (10 * (3 * q + r)) // t - 10 * digit
        else:
            q, r, t, k, digit, radix = (
                q * k,
                (2 * q + r) * radix,
                t * radix,
                k + 1,
                (q * (7 * k + 2) + r * radix) // (t * radix),
                radix + 2,
            )
    return "".join(emitted)


def mpmath_fractional_digits(count: int, guard: int = 20) -> str:
    count = int(count)
    if count < 0:
        raise ValueError("count must be >= 0")
    width = count + int(guard)
    with mp.workdps(width):
        s = mp.nstr(+mp.pi, width, min_fixed=-10**6, max_fixed=10**6)
    return s.split(".", 1)[1][:count]
