# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Define the default methods for axis-aligned boxes. A concrete hyperrectangle needs to provide only
# center(i=None) and radius_hyperrectangle(i=None).

import itertools

import numpy as np

from pylazysets.common import _check_bounds, raise_error_on_set_membership, sanitize_vector, sign_vector
from pylazysets.common.comparisons import _leq
from pylazysets.common.polytope_interface import sanitize_linear_map_matrix


def hyperrectangle_support_vector(self, d):
    """Private function to compute the support vector of a hyperrectangle. Instead, call `support_vector` method.

    Notes:
        In a direction with a zero entry, the support vector picks the center coordinate.
    """
    return self.center() + sign_vector(d) * self.radius_hyperrectangle()


def hyperrectangle_support_function(self, d):
    """Private function to compute the support function of a hyperrectangle. Instead, call `support_function`."""
    return d @ self.center() + np.abs(d) @ self.radius_hyperrectangle()


def low(self, i=None):
    """Lower coordinates of the hyperrectangle

    Args:
        i (int, optional): Dimension of interest. Defaults to None, in which case all lower coordinates are returned.

    Raises:
        IndexError: When i is out of bounds

    Returns:
        numpy.ndarray | float: Lower coordinate(s)
    """
    if i is None:
        return self.center() - self.radius_hyperrectangle()
    _check_bounds(self, i)
    return self.center(i) - self.radius_hyperrectangle(i)


def high(self, i=None):
    """Higher coordinates of the hyperrectangle. See :meth:`low`."""
    if i is None:
        return self.center() + self.radius_hyperrectangle()
    _check_bounds(self, i)
    return self.center(i) + self.radius_hyperrectangle(i)


def hyperrectangle_vertices_list(self):
    """Vertices of the hyperrectangle

    Returns:
        numpy.ndarray: Matrix with a vertex in each row. Dimensions with zero radius do not double the number of
        vertices.
    """
    c = self.center()
    r = self.radius_hyperrectangle()
    nonflat_dims = [i for i in range(self.dim) if r[i] != 0]
    vertices = []
    for signs in itertools.product([1, -1], repeat=len(nonflat_dims)):
        v = c.copy()
        for sign, i in zip(signs, nonflat_dims):
            v[i] = c[i] + sign * r[i]
        vertices.append(v)
    return np.array(vertices)


def hyperrectangle_constraints_list(self):
    """Constraints of the hyperrectangle, two per dimension, ordered as (e_1, -e_1, e_2, -e_2, ...)

    Returns:
        list: List of HalfSpace objects
    """
    from pylazysets.HalfSpace import HalfSpace

    c = self.center()
    r = self.radius_hyperrectangle()
    constraints = []
    for i in range(self.dim):
        e_i = np.zeros((self.dim,))
        e_i[i] = 1
        constraints.append(HalfSpace(a=e_i, b=c[i] + r[i]))
        constraints.append(HalfSpace(a=-e_i, b=r[i] - c[i]))
    return constraints


def hyperrectangle_genmat(self):
    """Generator matrix of the hyperrectangle with one generator per dimension with a non-zero radius

    Returns:
        numpy.ndarray: Matrix (self.dim times self.ngens)
    """
    r = self.radius_hyperrectangle()
    nonflat_dims = [i for i in range(self.dim) if r[i] != 0]
    G = np.zeros((self.dim, len(nonflat_dims)), dtype=r.dtype)
    for column_index, i in enumerate(nonflat_dims):
        G[i, column_index] = r[i]
    return G


def hyperrectangle_ngens(self):
    """Number of generators of the hyperrectangle"""
    return self.genmat().shape[1]


def hyperrectangle_contains(self, x):
    """Check whether a point lies in the hyperrectangle

    Args:
        x (array_like): Point

    Raises:
        ValueError: When x is a set
        ValueError: Mismatch in dimensions

    Returns:
        bool: True if :math:`|x_i - c_i| \\leq r_i` (approximately) for all i
    """
    raise_error_on_set_membership(x)
    x = sanitize_vector(x)
    if x.size != self.dim:
        raise ValueError(f"Mismatch in dimensions (self.dim: {self.dim:d} and x.dim: {x.size:d})")
    c = self.center()
    r = self.radius_hyperrectangle()
    return all(_leq(abs(x[i] - c[i]), r[i]) for i in range(self.dim))


def hyperrectangle_translate(self, v):
    """Translate the hyperrectangle by v

    Returns:
        Hyperrectangle: Hyperrectangle with the same radius and the center shifted by v
    """
    from pylazysets.Hyperrectangle import Hyperrectangle

    v = sanitize_vector(v, name="v")
    if v.size != self.dim:
        raise ValueError(f"Expected a translation vector of length {self.dim:d}. Got {v.size:d}")
    return Hyperrectangle(center=self.center() + v, radius=self.radius_hyperrectangle())


def zonotopic_linear_map(self, M):
    """Apply the linear map M to a zonotopic set

    Args:
        M (array_like): Matrix with self.dim columns

    Returns:
        Zonotope: Zonotope with center M c and generators M G
    """
    from pylazysets.Zonotope import Zonotope

    M = sanitize_linear_map_matrix(self, M)
    return Zonotope(center=M @ self.center(), generators=M @ self.genmat())
