"""Membership test for compressed Edwards25519 points."""

_P = 2**255 - 19
_D = (-121665 * pow(121666, -1, _P)) % _P
_Y_MASK = (1 << 255) - 1


def is_on_curve(point_bytes: bytes) -> bool:
    """Return True if the 32 bytes decode to a point on Edwards25519.

    Non-canonical y coordinates are reduced modulo p and accepted, and the
    sign bit of x is ignored, so only the existence of x is checked.
    """
    point_bytes = bytes(point_bytes)
    if len(point_bytes) != 32:
        return False
    y = (int.from_bytes(point_bytes, "little") & _Y_MASK) % _P
    y_squared = y * y % _P
    numerator = (y_squared - 1) % _P
    denominator = (_D * y_squared + 1) % _P
    x_squared = numerator * pow(denominator, _P - 2, _P) % _P
    return x_squared == 0 or pow(x_squared, (_P - 1) // 2, _P) == 1