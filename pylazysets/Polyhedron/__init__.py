# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the HPolyhedron, HPolytope, and HPolygon classes for sets given by finitely many halfspaces

import cvxpy as cp
import numpy as np

from pylazysets.common import (
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    minimize,
    raise_error_on_set_membership,
    remove_trivial_rows_in_Ab,
    sanitize_Ab,
    sanitize_vector,
)
from pylazysets.common.comparisons import _leq
from pylazysets.common.constants import DEFAULT_CVXPY_ARGS_LP
from pylazysets.common.polytope_interface import (
    _linear_map_hrep_helper,
    linear_map_of_constraints,
    polytope_is_empty,
    polytope_is_universal,
    polytope_volume,
    sanitize_linear_map_matrix,
)
from pylazysets.Polyhedron.vertex_halfspace_enumeration import (
    enumerate_vertices,
    minimal_halfspaces,
    polyhedron_is_bounded,
)


class HPolyhedron:
    r"""HPolyhedron class for a (possibly unbounded) polyhedron :math:`\{x\ |\ Ax \leq b\}`.

    We can define an HPolyhedron object in the following formats:

    * **Halfspace representation**: Specify (A, b).
    * **List of constraints**: Specify constraints as a list of HalfSpace objects.
    * **Universal set**: Specify dim. The polyhedron has no constraints.

    Args:
        A (array_like, optional): Inequality coefficient matrix
        b (array_like, optional): Inequality coefficient vector
        constraints (list, optional): List of HalfSpace objects
        dim (int, optional): Dimension of the universal set

    Raises:
        ValueError: When arguments provided is not one of [(A, b), constraints, dim]
        ValueError: When (A, b) is not a valid halfspace combination

    Notes:
        Rows of (A, b) with an all-zero row in A (and a non-negative b) or an infinite b are removed with a warning.
    """

    def __init__(self, **kwargs):
        """Constructor for HPolyhedron class"""
        self._cvxpy_args_lp = DEFAULT_CVXPY_ARGS_LP
        if len(kwargs) == 2 and "A" in kwargs and "b" in kwargs:
            A, b = sanitize_Ab(kwargs["A"], kwargs["b"])
            if b.size == 0:
                A = np.empty((0, A.shape[1]))
        elif len(kwargs) == 1 and "constraints" in kwargs:
            constraints = list(kwargs["constraints"])
            if len(constraints) == 0:
                raise ValueError("Expected a non-empty list of constraints. Use dim for an unconstrained set.")
            A, b = sanitize_Ab([c.a for c in constraints], [c.b for c in constraints])
        elif len(kwargs) == 1 and "dim" in kwargs:
            dim = kwargs["dim"]
            if int(dim) != dim or dim < 0:
                raise ValueError(f"Expected dim to be a non-negative integer. Got {dim}")
            A, b = np.empty((0, int(dim))), np.empty((0,))
        else:
            raise ValueError(f"Invalid keyword arguments {list(kwargs.keys())}. Use (A, b), constraints, or dim")
        self._A, self._b = remove_trivial_rows_in_Ab(A, b)
        self._type_of_set = "HPolyhedron"

    @property
    def type_of_set(self):
        """Type of the set"""
        return self._type_of_set

    @property
    def dim(self):
        """Dimension of the polyhedron"""
        return self._A.shape[1]

    @property
    def A(self):
        """Inequality coefficient matrix"""
        return self._A

    @property
    def b(self):
        """Inequality coefficient vector"""
        return self._b

    @property
    def n_halfspaces(self):
        """Number of halfspaces in the H-rep"""
        return self._A.shape[0]

    @property
    def cvxpy_args_lp(self):
        """CVXPY arguments in use when solving a linear program

        Returns:
            dict: CVXPY arguments in use when solving a linear program. Defaults to dictionary in
            `pylazysets.common.constants.DEFAULT_CVXPY_ARGS_LP`.
        """
        return self._cvxpy_args_lp

    @cvxpy_args_lp.setter
    def cvxpy_args_lp(self, value):
        """Update CVXPY arguments in use when solving a linear program

        Args:
            value (dict): Dictionary with new CVXPY arguments in use when solving a linear program.
        """
        self._cvxpy_args_lp = value

    @property
    def is_empty(self):
        """Check if the polyhedron is empty by solving a feasibility problem"""
        if self.n_halfspaces == 0:
            return False
        x = cp.Variable((self.dim,))
        _, value, _ = self.minimize(x, objective_to_minimize=0, cvxpy_args=self.cvxpy_args_lp, task_str="emptiness")
        return value == np.inf

    @property
    def is_bounded(self):
        """Check if the polyhedron is bounded using the generators computed by cdd"""
        return polyhedron_is_bounded(self._A, self._b)

    def is_universal(self, witness=False):
        """Check whether the polyhedron is universal, i.e., it has no constraints.

        Args:
            witness (bool, optional): When True, compute a witness. Defaults to False.

        Returns:
            bool | tuple: When witness is True, a tuple (True, empty vector) for a universal polyhedron, and
            (False, v) otherwise, where v violates the first constraint.
        """
        if self.n_halfspaces == 0:
            return (True, np.empty((0,))) if witness else True
        return polytope_is_universal(self, witness=witness)

    def constraints_list(self):
        """List of constraints of the polyhedron

        Returns:
            list: List of HalfSpace objects, one per row of (A, b)
        """
        from pylazysets.HalfSpace import HalfSpace

        return [HalfSpace(a=a, b=b) for a, b in zip(self._A, self._b)]

    def tosimplehrep(self):
        """Simple halfspace representation (A, b)"""
        return self._A.copy(), self._b.copy()

    def containment_constraints(self, x):
        """Get CVXPY constraints for containment of x (a cvxpy.Variable) in the polyhedron.

        Args:
            x (cvxpy.Variable): CVXPY variable to be optimized

        Returns:
            list: List of CVXPY constraints
        """
        if self.n_halfspaces == 0:
            return []
        return [self._A @ x <= self._b]

    minimize = minimize

    def _compute_support_vector_and_function(self, d):
        x = cp.Variable((self.dim,))
        support_vector, negative_support_function, _ = self.minimize(
            x,
            objective_to_minimize=-d @ x,
            cvxpy_args=self.cvxpy_args_lp,
            task_str=f"support function evaluation of the set at d = {np.array2string(np.array(d)):s}",
        )
        if negative_support_function == np.inf:
            raise ValueError("Set must be non-empty for support function evaluation.")
        elif negative_support_function == -np.inf:
            return np.inf, np.inf * np.ones((self.dim,))
        return -negative_support_function, support_vector

    def _compute_support_function_single_eta(self, d):
        """Private function to compute the support function by solving a linear program using CVXPY. Instead, call
        `support_function` method.

        Notes:
            Returns np.inf when the polyhedron is unbounded along d.
        """
        return self._compute_support_vector_and_function(d)[0]

    def _compute_support_vector_single_eta(self, d):
        """Private function to compute the support vector by solving a linear program using CVXPY. Instead, call
        `support_vector` method.

        Notes:
            Returns a vector of np.inf when the polyhedron is unbounded along d.
        """
        return self._compute_support_vector_and_function(d)[1]

    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector

    def contains(self, x):
        """Check whether a point satisfies every constraint (approximately)

        Args:
            x (array_like): Point

        Raises:
            ValueError: When x is a set
            ValueError: Mismatch in dimensions

        Returns:
            bool: True if :math:`a_i^\\top x \\leq b_i` (approximately) for each row i
        """
        raise_error_on_set_membership(x)
        x = sanitize_vector(x)
        if x.size != self.dim:
            raise ValueError(f"Mismatch in dimensions (self.dim: {self.dim:d} and x.dim: {x.size:d})")
        return all(_leq(a @ x, b) for a, b in zip(self._A, self._b))

    __contains__ = contains

    def translate(self, v):
        """Translate the polyhedron by v

        Returns:
            HPolyhedron: Same type as self with the offsets b + A v
        """
        v = sanitize_vector(v, name="v")
        if v.size != self.dim:
            raise ValueError(f"Expected a translation vector of length {self.dim:d}. Got {v.size:d}")
        return self._from_Ab(self._A, self._b + self._A @ v)

    def linear_map(self, M):
        """Apply the linear map M to the polyhedron

        Raises:
            ValueError: When M is not invertible and the polyhedron is unbounded

        Returns:
            HPolyhedron: Image for an invertible M. Bounded polyhedra are mapped via
            :meth:`pylazysets.common.polytope_interface._linear_map_hrep_helper`.
        """
        M = sanitize_linear_map_matrix(self, M)
        if M.shape[0] == M.shape[1] and np.linalg.matrix_rank(M) == M.shape[0]:
            A, b = linear_map_of_constraints(M, self._A, self._b)
            return HPolyhedron(A=A, b=b)
        elif not self.is_bounded:
            raise ValueError("Linear map of an unbounded polyhedron requires an invertible matrix!")
        return _linear_map_hrep_helper(self._to_polytope(), M)

    def remove_redundant_constraints(self):
        """Remove any redundant constraints using cdd

        Returns:
            HPolyhedron: Same type as self with a minimal H-rep. An empty set is returned unchanged.
        """
        if self.n_halfspaces == 0 or self.is_empty:
            return self.copy()
        A, b = minimal_halfspaces(self._A, self._b)
        return self._from_Ab(A, b)

    def _from_Ab(self, A, b):
        if A.shape[0] == 0:
            return self.__class__(dim=self.dim)
        return self.__class__(A=A, b=b)

    def _to_polytope(self):
        return HPolytope(A=self._A, b=self._b)

    def copy(self):
        """Create a copy of the polyhedron"""
        return self._from_Ab(self._A.copy(), self._b.copy())

    def __str__(self):
        return f"{self.type_of_set:s} in R^{self.dim:d}"

    def __repr__(self):
        return f"{self.type_of_set:s} in R^{self.dim:d} with {self.n_halfspaces:d} halfspaces"


class HPolytope(HPolyhedron):
    r"""HPolytope class for a bounded polyhedron :math:`\{x\ |\ Ax \leq b\}`.

    See :class:`HPolyhedron` for the arguments. Boundedness is not checked at construction, and vertices are enumerated
    with cdd on first use.
    """

    def __init__(self, **kwargs):
        """Constructor for HPolytope class"""
        super().__init__(**kwargs)
        self._V = None
        self._type_of_set = "HPolytope"

    is_bounded = True
    is_empty = property(polytope_is_empty)
    is_universal = polytope_is_universal
    volume = polytope_volume

    def vertices_list(self):
        """Vertices of the polytope (enumerated once with cdd)

        Raises:
            ValueError: When vertex enumeration yields rays

        Returns:
            numpy.ndarray: Matrix with a vertex in each row
        """
        if self._V is None:
            self._V = enumerate_vertices(self._A, self._b)
        return self._V.copy()

    def linear_map(self, M):
        """Apply the linear map M to the polytope. See
        :meth:`pylazysets.common.polytope_interface._linear_map_hrep_helper`."""
        return _linear_map_hrep_helper(self, M)

    def _to_polytope(self):
        return self


class HPolygon(HPolytope):
    """HPolygon class for a two-dimensional polytope in H-rep. The constraints are sorted by the angle of their normal
    vectors in counter-clockwise order starting from the direction (1, 0).

    See :class:`HPolyhedron` for the arguments.

    Raises:
        ValueError: When the set is not two-dimensional
    """

    def __init__(self, **kwargs):
        """Constructor for HPolygon class"""
        super().__init__(**kwargs)
        if self.dim != 2:
            raise ValueError(f"Expected a two-dimensional set. Got {self.dim:d} dimensions.")
        angles = np.mod(np.arctan2(self._A[:, 1], self._A[:, 0]), 2 * np.pi)
        order = np.argsort(angles, kind="stable")
        self._A, self._b = self._A[order, :], self._b[order]
        self._type_of_set = "HPolygon"
