# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the Zonotope class

import itertools

import cvxpy as cp
import numpy as np

from pylazysets.common import (
    _check_bounds,
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    minimize,
    raise_error_on_set_membership,
    sanitize_Gc,
    sanitize_vector,
    sign_vector,
)
from pylazysets.common.constants import DEFAULT_CVXPY_ARGS_SOCP, PYLAZYSETS_ZERO
from pylazysets.common.hyperrectangle_interface import zonotopic_linear_map
from pylazysets.common.polytope_interface import polytope_is_universal, polytope_volume, tosimplehrep
from pylazysets.Polyhedron.vertex_halfspace_enumeration import enumerate_halfspaces, minimal_vertices


class Zonotope:
    r"""Zonotope class for the set :math:`\{c + G\xi\ |\ \|\xi\|_\infty \leq 1\}`.

    Args:
        center (array_like): Center c of the zonotope
        generators (array_like, optional): Generator matrix G with one generator in each column. Defaults to None, in
            which case the zonotope is the singleton {c}.

    Raises:
        ValueError: When (generators, center) is not a valid combination
    """

    def __init__(self, center, generators=None):
        """Constructor for Zonotope class"""
        self._G, self._c = sanitize_Gc(generators, center)
        self._cvxpy_args_socp = DEFAULT_CVXPY_ARGS_SOCP
        self._type_of_set = "Zonotope"

    @property
    def type_of_set(self):
        """Type of the set"""
        return self._type_of_set

    @property
    def dim(self):
        """Dimension of the zonotope"""
        return self._c.size

    @property
    def cvxpy_args_socp(self):
        """CVXPY arguments in use when solving a second-order cone program"""
        return self._cvxpy_args_socp

    @cvxpy_args_socp.setter
    def cvxpy_args_socp(self, value):
        """Update CVXPY arguments in use when solving a second-order cone program"""
        self._cvxpy_args_socp = value

    is_empty = False
    is_bounded = True

    def center(self, i=None):
        """Center of the zonotope, or its i-th coordinate

        Raises:
            IndexError: When i is out of bounds
        """
        if i is None:
            return self._c.copy()
        _check_bounds(self, i)
        return self._c[i]

    def genmat(self):
        """Generator matrix (self.dim times self.ngens)"""
        return self._G.copy()

    def ngens(self):
        """Number of generators"""
        return self._G.shape[1]

    def remove_zero_generators(self):
        """Zonotope without the all-zero columns of the generator matrix"""
        nonzero_columns = [j for j in range(self.ngens()) if np.any(self._G[:, j] != 0)]
        return Zonotope(center=self._c, generators=self._G[:, nonzero_columns])

    def _compute_support_vector_single_eta(self, d):
        """Private function to compute the support vector c + G sign(G^T d). Instead, call `support_vector`."""
        return self._c + self._G @ sign_vector(self._G.T @ d)

    def _compute_support_function_single_eta(self, d):
        """Private function to compute the support function d^T c + ||G^T d||_1. Instead, call `support_function`."""
        return d @ self._c + sum(abs(g_d) for g_d in self._G.T @ d)

    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector

    def vertices_list(self):
        """Vertices of the zonotope

        Returns:
            numpy.ndarray: Matrix with a vertex in each row

        Notes:
            We enumerate all 2^ngens sign combinations of the generators and remove the redundant points with qhull or
            cdd. This is expensive for zonotopes with many generators.
        """
        G = self.remove_zero_generators().genmat()
        if G.shape[1] == 0:
            return np.array([self._c])
        points = np.array(
            [self._c + G @ np.array(signs) for signs in itertools.product([1, -1], repeat=G.shape[1])]
        )
        return minimal_vertices(points)

    def constraints_list(self):
        """Constraints of the zonotope, computed with cdd from its vertices

        Returns:
            list: List of HalfSpace objects
        """
        from pylazysets.HalfSpace import HalfSpace

        A, b = enumerate_halfspaces(self.vertices_list())
        return [HalfSpace(a=a_i, b=b_i) for a_i, b_i in zip(A, b)]

    tosimplehrep = tosimplehrep
    is_universal = polytope_is_universal
    volume = polytope_volume

    def containment_constraints(self, x):
        """Get CVXPY constraints for containment of x (a cvxpy.Variable) in the zonotope.

        Args:
            x (cvxpy.Variable): CVXPY variable to be optimized

        Returns:
            list: List of CVXPY constraints
        """
        if self.ngens() == 0:
            return [x == self._c.astype(float)]
        xi = cp.Variable((self.ngens(),))
        return [x == self._c.astype(float) + self._G.astype(float) @ xi, cp.norm(xi, "inf") <= 1]

    minimize = minimize

    def contains(self, x):
        """Check whether a point lies in the zonotope

        Args:
            x (array_like): Point

        Raises:
            ValueError: When x is a set
            ValueError: Mismatch in dimensions

        Returns:
            bool: True if the distance of x to the zonotope is at most PYLAZYSETS_ZERO
        """
        raise_error_on_set_membership(x)
        x = sanitize_vector(x)
        if x.size != self.dim:
            raise ValueError(f"Mismatch in dimensions (self.dim: {self.dim:d} and x.dim: {x.size:d})")
        y = cp.Variable((self.dim,))
        _, distance, _ = self.minimize(
            y,
            objective_to_minimize=cp.norm(y - x.astype(float), 2),
            cvxpy_args=self.cvxpy_args_socp,
            task_str="point containment",
        )
        return bool(distance <= PYLAZYSETS_ZERO)

    __contains__ = contains

    def translate(self, v):
        """Translate the zonotope by v"""
        v = sanitize_vector(v, name="v")
        if v.size != self.dim:
            raise ValueError(f"Expected a translation vector of length {self.dim:d}. Got {v.size:d}")
        return Zonotope(center=self._c + v, generators=self._G)

    linear_map = zonotopic_linear_map

    def copy(self):
        """Create a copy of the zonotope"""
        return Zonotope(center=self._c.copy(), generators=self._G.copy())

    def __str__(self):
        return f"Zonotope in R^{self.dim:d}"

    def __repr__(self):
        return f"Zonotope in R^{self.dim:d} with {self.ngens():d} generators"
