# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Tolerance-aware comparisons of scalars and vectors used by the geometric predicates

import numbers

import numpy as np

from pylazysets.common.constants import ABSZTOL_EXACT, ABSZTOL_FLOAT, RTOL_EXACT, RTOL_FLOAT


def is_exact_number(x):
    """Check if a scalar is of an exact numeric type (int, fractions.Fraction, numpy integers)

    Args:
        x (object): Scalar to check

    Returns:
        bool: True if comparisons involving x may be performed without tolerance
    """
    return isinstance(x, numbers.Rational)


def default_ztol(*xs):
    """Default absolute zero tolerance for the given operands.

    Args:
        xs (object): Scalars to be compared

    Returns:
        float | int: ABSZTOL_EXACT when all operands are exact, and ABSZTOL_FLOAT otherwise.
    """
    if all(is_exact_number(x) for x in xs):
        return ABSZTOL_EXACT
    else:
        return ABSZTOL_FLOAT


def default_rtol(*xs):
    """Default relative tolerance for the given operands. See :meth:`default_ztol`."""
    if all(is_exact_number(x) for x in xs):
        return RTOL_EXACT
    else:
        return RTOL_FLOAT


def isapproxzero(x, ztol=None):
    """Check if a scalar is approximately zero.

    Args:
        x (float | int | fractions.Fraction): Scalar to check
        ztol (float, optional): Absolute zero tolerance. Defaults to None, in which case :meth:`default_ztol` is used.

    Returns:
        bool: True if :math:`|x| \\leq` ztol
    """
    if ztol is None:
        ztol = default_ztol(x)
    return bool(abs(x) <= ztol)


def _isapprox(x, y, rtol=None, ztol=None, atol=0):
    r"""Approximate equality of two scalars.

    Args:
        x (float | int | fractions.Fraction): First scalar
        y (float | int | fractions.Fraction): Second scalar
        rtol (float, optional): Relative tolerance. Defaults to None, in which case :meth:`default_rtol` is used.
        ztol (float, optional): Absolute zero tolerance. Defaults to None, in which case :meth:`default_ztol` is used.
        atol (float, optional): Absolute tolerance for the relative comparison. Defaults to 0.

    Returns:
        bool: True if both x and y are approximately zero, or if
        :math:`|x - y| \leq \max(\text{atol}, \text{rtol}\max(|x|, |y|))`.

    Notes:
        The zero tolerance is applied to each operand separately and not to their difference. Consequently, two tiny
        numbers are approximately equal for the default tolerance, while two numbers that are larger than ztol are
        compared only with the relative tolerance.
    """
    if ztol is None:
        ztol = default_ztol(x, y)
    if rtol is None:
        rtol = default_rtol(x, y)
    if isapproxzero(x, ztol=ztol) and isapproxzero(y, ztol=ztol):
        return True
    elif x == y:
        return True
    elif abs(x) == np.inf or abs(y) == np.inf:
        return False
    else:
        return bool(abs(x - y) <= max(atol, rtol * max(abs(x), abs(y))))


def _leq(x, y, rtol=None, ztol=None, atol=0):
    """Approximate x <= y. See :meth:`_isapprox` for the arguments."""
    return bool(x <= y) or _isapprox(x, y, rtol=rtol, ztol=ztol, atol=atol)


def _geq(x, y, rtol=None, ztol=None, atol=0):
    """Approximate x >= y. See :meth:`_isapprox` for the arguments."""
    return _leq(y, x, rtol=rtol, ztol=ztol, atol=atol)


def isapprox_vector(x, y, rtol=None, ztol=None, atol=0):
    """Elementwise approximate equality of two vectors with :meth:`_isapprox`.

    Args:
        x (array_like): First vector
        y (array_like): Second vector
        rtol (float, optional): Relative tolerance. Defaults to None.
        ztol (float, optional): Absolute zero tolerance. Defaults to None.
        atol (float, optional): Absolute tolerance. Defaults to 0.

    Returns:
        bool: True if x and y have the same shape and all elements are approximately equal.
    """
    x = np.atleast_1d(x)
    y = np.atleast_1d(y)
    if x.shape != y.shape:
        return False
    return all(_isapprox(xi, yi, rtol=rtol, ztol=ztol, atol=atol) for xi, yi in zip(x.flat, y.flat))
