# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the Ellipsoid class

import cvxpy as cp
import numpy as np

from pylazysets.common import (
    convex_set_minimum_volume_circumscribing_rectangle,
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    minimize,
    raise_error_on_set_membership,
    sanitize_vector,
)
from pylazysets.common.constants import DEFAULT_CVXPY_ARGS_SOCP, PYLAZYSETS_ZERO
from pylazysets.common.polytope_interface import sanitize_linear_map_matrix


class Ellipsoid:
    r"""Ellipsoid class.

    We can define a bounded, non-empty ellipsoid :math:`\mathcal{P}` using **one** of the following combinations:

    #. :math:`(c, Q)` for a full-dimensional ellipsoid in the **quadratic form**
       :math:`\mathcal{P}=\{x \in \mathbb{R}^n\ |\  (x - c)^T Q^{-1} (x - c) \leq 1\}` with a n-dimensional
       positive-definite matrix :math:`Q` and a n-dimensional vector :math:`c`. Here, we compute a n-dimensional
       lower-triangular, square matrix :math:`G` that satisfies :math:`GG^T=Q`.
    #. :math:`(c, G)` for a full-dimensional or a degenerate ellipsoid as an **affine transformation of a unit-ball**
       :math:`\mathcal{P} = \{x \in \mathbb{R}^n\ |\ \exists u\in\mathbb{R}^N,\ x = c + G u,\ {\|u\|}_2 \leq 1\}` with a
       n x N matrix :math:`G`. Here, we compute :math:`Q=GG^T`.
    #. :math:`(c, r)` for a ball of radius r.

    Args:
        c (array_like): Center of the ellipsoid c. Vector of length (self.dim,)
        Q (array_like, optional): Shape matrix of the ellipsoid Q. Q must be a positive definite matrix
            (self.dim times self.dim).
        G (array_like, optional): Square root of the shape matrix of the ellipsoid G that satisfies :math:`GG^T=Q`.
            Need not be a square matrix, but must have self.dim rows.
        r (scalar, optional): Non-negative scalar that provides the radius of the self.dim-dimensional ball.

    Raises:
        ValueError: When more than one of Q, G, r was provided
        ValueError: When c or Q or G or r does not satisfy implicit properties

    Notes:
        An ellipsoid is bounded but not polyhedral. Use a polyhedral over-approximation when an operation requires a
        finite halfspace representation.
    """

    def __init__(self, **kwargs):
        """Constructor for Ellipsoid"""
        try:
            self._c = sanitize_vector(kwargs.pop("c"), name="c").astype(float)
        except KeyError as err:
            raise ValueError("c is a required argument!") from err

        if len(kwargs) >= 2:
            # Set only one of Q, G, or r
            raise ValueError("Expected only Q or G or r to be provided.")
        elif len(kwargs) == 0:
            self._G = np.zeros((self.dim, 0))
        elif "r" in kwargs:
            r = float(kwargs.pop("r"))
            if r < 0:
                raise ValueError("Expected r to be a non-negative scalar")
            self._G = r * np.eye(self.dim)
        elif "G" in kwargs:
            self._G = np.atleast_2d(kwargs.pop("G")).astype(float)
            if self._G.shape[0] != self.dim:
                raise ValueError(f"Expected G to have {self.dim:d} rows.")
        elif "Q" in kwargs:
            # Check if Q is indeed a 2D square matrix of correct dimension
            Q = np.atleast_2d(kwargs.pop("Q")).astype(float)
            n_rows, n_cols = Q.shape
            if n_rows != n_cols or n_rows != self.dim:
                raise ValueError(f"Expected square Q of dimension {self.dim:d}")
            if not np.isclose(2 * Q, Q + Q.T).all():
                raise ValueError("Expected Q to be symmetric!")
            try:
                self._G = np.linalg.cholesky(Q)
            except np.linalg.LinAlgError as err:
                raise ValueError(
                    "Expected Q to be positive definite! Use (c, G) to define degenerate ellipsoids."
                ) from err
        else:
            raise ValueError(f"Invalid kwarg provided! Got {kwargs}. Expected either Q, G, or r!")
        self._cvxpy_args_socp = DEFAULT_CVXPY_ARGS_SOCP

    @property
    def type_of_set(self):
        """Type of the set"""
        return "Ellipsoid"

    @property
    def dim(self):
        """Dimension of the ellipsoid :math:`dim`"""
        return self._c.shape[0]

    @property
    def c(self):
        """Center of the ellipsoid :math:`c`"""
        return self._c

    @property
    def Q(self):
        """Shape matrix of the ellipsoid :math:`Q`"""
        return self._G @ self._G.T

    @property
    def G(self):
        r"""Affine transformation matrix :math:`G` that satisfies :math:`GG^T=Q`"""
        return self._G

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

    def center(self):
        """Center of the ellipsoid"""
        return self._c.copy()

    def _compute_support_vector_single_eta(self, d):
        """Private function to compute the support vector c + Q d / ||G^T d||"""
        norm_scaling = np.linalg.norm(self._G.T @ d, ord=2)
        if norm_scaling <= PYLAZYSETS_ZERO:
            return self._c.copy()
        return self._c + (self.Q @ d) / norm_scaling

    def _compute_support_function_single_eta(self, d):
        """Private function to compute the support function d^T c + ||G^T d||"""
        return d @ self._c + np.linalg.norm(self._G.T @ d, ord=2)

    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector
    minimum_volume_circumscribing_rectangle = convex_set_minimum_volume_circumscribing_rectangle

    def containment_constraints(self, x):
        """Get CVXPY constraints for containment of x (a cvxpy.Variable) in the ellipsoid.

        Args:
            x (cvxpy.Variable): CVXPY variable to be optimized

        Returns:
            list: List of CVXPY constraints
        """
        if self._G.shape[1] == 0:
            return [x == self._c]
        u = cp.Variable((self._G.shape[1],))
        return [x == self._c + self._G @ u, cp.norm(u, 2) <= 1]

    minimize = minimize

    def contains(self, x):
        """Check whether a point lies in the ellipsoid

        Args:
            x (array_like): Point

        Raises:
            ValueError: When x is a set
            ValueError: Mismatch in dimensions

        Returns:
            bool: True if the distance of x to the ellipsoid is at most PYLAZYSETS_ZERO
        """
        raise_error_on_set_membership(x)
        x = sanitize_vector(x).astype(float)
        if x.size != self.dim:
            raise ValueError(f"Mismatch in dimensions (self.dim: {self.dim:d} and x.dim: {x.size:d})")
        y = cp.Variable((self.dim,))
        _, distance, _ = self.minimize(
            y, objective_to_minimize=cp.norm(y - x, 2), cvxpy_args=self.cvxpy_args_socp, task_str="point containment"
        )
        return bool(distance <= PYLAZYSETS_ZERO)

    __contains__ = contains

    def translate(self, v):
        """Translate the ellipsoid by v"""
        v = sanitize_vector(v, name="v")
        if v.size != self.dim:
            raise ValueError(f"Expected a translation vector of length {self.dim:d}. Got {v.size:d}")
        return Ellipsoid(c=self._c + v, G=self._G)

    def linear_map(self, M):
        """Apply the linear map M to the ellipsoid

        Returns:
            Ellipsoid: Ellipsoid with center M c and G replaced by M G
        """
        M = sanitize_linear_map_matrix(self, M).astype(float)
        return Ellipsoid(c=M @ self._c, G=M @ self._G)

    def copy(self):
        """Create a copy of the ellipsoid"""
        return Ellipsoid(c=self._c.copy(), G=self._G.copy())

    def __str__(self):
        return f"Ellipsoid in R^{self.dim:d}"

    __repr__ = __str__
