from petlib.bn import Bn


def ensure_bn(x):
    """
    Ensure that value is big number.

    Python integers of any size are accepted. Anything else raises ``TypeError``.

    >>> isinstance(ensure_bn(42), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    >>> ensure_bn(2 ** 200) == Bn.from_decimal(str(2 ** 200))
    True
    """
    if isinstance(x, Bn):
        return x
    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError("Expected an integer. Got: {!r}".format(type(x).__name__))
    return Bn.from_decimal(str(x))


def in_range(x, lower, upper):
    """
    Check that ``lower <= x < upper``.

    >>> in_range(Bn(2), Bn(2), Bn(11))
    True
    >>> in_range(Bn(11), Bn(2), Bn(11))
    False
    """
    return ensure_bn(lower) <= x < ensure_bn(upper)


def is_subgroup_element(elem, params):
    """
    Check that ``elem`` is a canonical element of the order-``q`` subgroup of :math:`Z_p^*`.
    """
    if not in_range(elem, 1, params.p):
        return False
    return elem.mod_pow(params.q, params.p) == Bn(1)


def mod_pow_neg(base, exponent, params):
    """
    Compute :math:`base^{-exponent} \\bmod p` for a subgroup element ``base``.

    Uses :math:`base^q = 1`, so the inverse power is :math:`base^{q - (exponent \\bmod q)}`.
    """
    return base.mod_pow((params.q - exponent % params.q) % params.q, params.p)
