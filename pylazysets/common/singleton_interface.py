# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Define the default methods for sets with a single element. A concrete singleton needs to provide only
# the attribute _element.

import numpy as np

from pylazysets.common import _check_bounds, raise_error_on_set_membership, sanitize_vector
from pylazysets.common.comparisons import isapprox_vector


def element(self, i=None):
    """Return the element of the singleton, or its i-th entry.

    Args:
        i (int, optional): Dimension of interest (zero-based). Defaults to None, in which case the element is returned.

    Raises:
        IndexError: When i is not in the integer interval [0, self.dim - 1]

    Returns:
        numpy.ndarray | float: Element or its i-th entry
    """
    if i is None:
        return self._element.copy()
    _check_bounds(self, i)
    return self._element[i]


def singleton_center(self, i=None):
    """Return the center of the singleton, which is the element itself. See :meth:`element`."""
    return element(self, i)


def singleton_radius_hyperrectangle(self, i=None):
    """Box radius of a singleton, which is zero in every dimension.

    Raises:
        IndexError: When i is out of bounds
    """
    if i is None:
        return np.zeros((self.dim,), dtype=self._element.dtype)
    _check_bounds(self, i)
    return 0 * self._element[i]


def singleton_vertices_list(self):
    """List of vertices of a singleton, which contains only the element"""
    return np.array([self._element])


def singleton_genmat(self):
    """Generator matrix of a singleton, which has no columns"""
    return np.empty((self.dim, 0), dtype=self._element.dtype)


def singleton_ngens(self):
    """Number of generators of a singleton, which is zero"""
    return 0


def singleton_support_vector(self, d):
    """Private function. The support vector of a singleton is its element, irrespective of the direction."""
    return self._element.copy()


def singleton_support_function(self, d):
    """Private function. The support function of a singleton is the inner product of the direction and the element."""
    return d @ self._element


def singleton_contains(self, x):
    """Check whether a point is the element of the singleton.

    Args:
        x (array_like): Point

    Raises:
        ValueError: When x is a set. Use set inclusion or test membership of the element instead.

    Returns:
        bool: True if x is approximately equal to the element

    Notes:
        This implementation performs an approximate comparison to account for imprecision in floating-point
        computations.
    """
    raise_error_on_set_membership(x)
    x = sanitize_vector(x)
    return isapprox_vector(x, self._element)


def chebyshev_center_radius(self):
    """Chebyshev center and radius of a singleton

    Returns:
        tuple: (element, 0)
    """
    return self.element(), 0
