# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the VPolytope and VPolygon classes for polytopes given by finitely many vertices

import cvxpy as cp
import numpy as np
from scipy.spatial import ConvexHull

from pylazysets.common import (
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    minimize,
    raise_error_on_set_membership,
    sanitize_vector,
)
from pylazysets.common.constants import DEFAULT_CVXPY_ARGS_SOCP, PYLAZYSETS_ZERO
from pylazysets.common.polytope_interface import (
    _linear_map_vrep,
    polytope_is_empty,
    polytope_is_universal,
    polytope_translate_vertices,
    polytope_volume,
    tosimplehrep,
)
from pylazysets.Polyhedron.vertex_halfspace_enumeration import enumerate_halfspaces, minimal_vertices


def _sanitize_V(V):
    try:
        V = np.asarray(V)
        if V.dtype != object:
            V = V.astype(float)
        V = np.atleast_2d(V)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Expected V to be convertible into a 2D numpy array. Got {V}") from err
    if V.ndim != 2:
        raise ValueError(f"Expected V to be a 2D array. Got {np.array2string(np.array(V)):s}")
    elif V.dtype != object and (np.any(np.isnan(V)) or np.any(np.isinf(V))):
        raise ValueError(f"Expected V to be free from NaNs and infs. Got {np.array2string(np.array(V)):s}")
    return V


class VPolytope:
    """VPolytope class for the convex hull of finitely many points.

    We can define a VPolytope object in the following formats:

    * **Vertex representation**: Specify V (each row is a point). The points need not be the vertices of their convex
      hull. Use :meth:`minimize_V_rep` to remove the redundant points.
    * **Empty set**: Specify dim.

    Args:
        V (array_like, optional): Matrix with a point in each row
        dim (int, optional): Dimension of the empty polytope

    Raises:
        ValueError: When arguments provided is not one of [V, dim]
    """

    def __init__(self, **kwargs):
        """Constructor for VPolytope class"""
        self._cvxpy_args_socp = DEFAULT_CVXPY_ARGS_SOCP
        if len(kwargs) == 1 and "V" in kwargs:
            self._V = _sanitize_V(kwargs["V"])
        elif len(kwargs) == 1 and "dim" in kwargs:
            dim = kwargs["dim"]
            if int(dim) != dim or dim < 0:
                raise ValueError(f"Expected dim to be a non-negative integer. Got {dim}")
            self._V = np.empty((0, int(dim)))
        else:
            raise ValueError(f"Invalid keyword arguments {list(kwargs.keys())}. Use V or dim")
        self._Ab = None
        self._type_of_set = "VPolytope"

    @property
    def type_of_set(self):
        """Type of the set"""
        return self._type_of_set

    @property
    def dim(self):
        """Dimension of the polytope"""
        return self._V.shape[1]

    @property
    def V(self):
        """Matrix with a vertex in each row"""
        return self._V

    @property
    def n_vertices(self):
        """Number of vertices"""
        return self._V.shape[0]

    @property
    def cvxpy_args_socp(self):
        """CVXPY arguments in use when solving a second-order cone program

        Returns:
            dict: CVXPY arguments in use when solving a second-order cone program. Defaults to dictionary in
            `pylazysets.common.constants.DEFAULT_CVXPY_ARGS_SOCP`.
        """
        return self._cvxpy_args_socp

    @cvxpy_args_socp.setter
    def cvxpy_args_socp(self, value):
        """Update CVXPY arguments in use when solving a second-order cone program"""
        self._cvxpy_args_socp = value

    is_bounded = True
    is_empty = property(polytope_is_empty)
    is_universal = polytope_is_universal
    volume = polytope_volume

    def vertices_list(self):
        """Vertices of the polytope"""
        return self._V.copy()

    def minimize_V_rep(self, prefer_qhull_over_cdd=True):
        """Remove any redundant vertices from the vertex representation (in place) using qhull or cdd.

        Args:
            prefer_qhull_over_cdd (bool, optional): When True, use qhull for full-dimensional polytopes. Otherwise, we
                use cdd. Defaults to True.
        """
        if not self.is_empty:
            self._V = minimal_vertices(self._V, prefer_qhull_over_cdd=prefer_qhull_over_cdd)

    def constraints_list(self):
        """Constraints of the polytope, computed once with cdd

        Returns:
            list: List of HalfSpace objects
        """
        from pylazysets.HalfSpace import HalfSpace

        if self.is_empty:
            raise ValueError("Can not compute the constraints of an empty polytope!")
        if self._Ab is None:
            self._Ab = enumerate_halfspaces(self._V)
        return [HalfSpace(a=a, b=b) for a, b in zip(*self._Ab)]

    tosimplehrep = tosimplehrep

    def _compute_support_vector_single_eta(self, d):
        """Private function to compute the support vector by scanning the vertices. Instead, call `support_vector`."""
        if self.is_empty:
            raise ValueError("Set must be non-empty for support function evaluation.")
        return self._V[int(np.argmax(self._V @ d)), :].copy()

    def _compute_support_function_single_eta(self, d):
        """Private function to compute the support function by scanning the vertices. Instead, call
        `support_function`."""
        if self.is_empty:
            raise ValueError("Set must be non-empty for support function evaluation.")
        return max(self._V @ d)

    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector

    def containment_constraints(self, x):
        """Get CVXPY constraints for containment of x (a cvxpy.Variable) in the polytope, i.e., x is a convex
        combination of the vertices.

        Args:
            x (cvxpy.Variable): CVXPY variable to be optimized

        Raises:
            ValueError: When polytope is empty

        Returns:
            list: List of CVXPY constraints
        """
        if self.is_empty:
            raise ValueError("Containment constraints can not be generated for an empty polytope!")
        convex_weights = cp.Variable((self.n_vertices,), nonneg=True)
        V = self._V.astype(float)
        return [x == V.T @ convex_weights, cp.sum(convex_weights) == 1]

    minimize = minimize

    def contains(self, x):
        """Check whether a point lies in the polytope

        Args:
            x (array_like): Point

        Raises:
            ValueError: When x is a set
            ValueError: Mismatch in dimensions

        Returns:
            bool: True if the distance of x to the polytope is at most PYLAZYSETS_ZERO

        Notes:
            We solve a second-order cone program to compute the distance between x and the polytope.
        """
        raise_error_on_set_membership(x)
        x = sanitize_vector(x)
        if x.size != self.dim:
            raise ValueError(f"Mismatch in dimensions (self.dim: {self.dim:d} and x.dim: {x.size:d})")
        elif self.is_empty:
            return False
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
        """Translate the polytope by v"""
        if self.is_empty:
            return self.copy()
        return self.__class__(V=polytope_translate_vertices(self._V, v))

    def linear_map(self, M, apply_convex_hull=False):
        """Apply the linear map M to the polytope. See :meth:`pylazysets.common.polytope_interface._linear_map_vrep`."""
        return _linear_map_vrep(self, M, apply_convex_hull=apply_convex_hull)

    def copy(self):
        """Create a copy of the polytope"""
        if self.is_empty:
            return self.__class__(dim=self.dim)
        return self.__class__(V=self._V.copy())

    def __str__(self):
        return f"{self.type_of_set:s} in R^{self.dim:d}"

    def __repr__(self):
        return f"{self.type_of_set:s} in R^{self.dim:d} with {self.n_vertices:d} vertices"


class VPolygon(VPolytope):
    """VPolygon class for a two-dimensional polytope in vertex representation. The points are reduced to the vertices
    of their convex hull in counter-clockwise order at construction.

    See :class:`VPolytope` for the arguments.

    Raises:
        ValueError: When the set is not two-dimensional
    """

    def __init__(self, **kwargs):
        """Constructor for VPolygon class"""
        super().__init__(**kwargs)
        if self.dim != 2:
            raise ValueError(f"Expected a two-dimensional set. Got {self.dim:d} dimensions.")
        self._V = _convex_hull_counter_clockwise(self._V)
        self._type_of_set = "VPolygon"

    def minimize_V_rep(self, prefer_qhull_over_cdd=True):
        """The vertices of a VPolygon are always minimal"""
        pass


def _convex_hull_counter_clockwise(V):
    """Vertices of the convex hull of the rows of V (2D) in counter-clockwise order"""
    if V.shape[0] <= 1:
        return V
    V_float = V.astype(float)
    if np.linalg.matrix_rank(V_float[1:, :] - V_float[0, :], tol=PYLAZYSETS_ZERO) < 2:
        # Collinear points: keep the two extremes along the line
        direction = V_float[int(np.argmax(np.linalg.norm(V_float - V_float[0, :], axis=1))), :] - V_float[0, :]
        projections = V_float @ direction
        i_min, i_max = int(np.argmin(projections)), int(np.argmax(projections))
        if i_min == i_max:
            return V[:1, :]
        return V[[i_min, i_max], :]
    # qhull reports the vertices of a 2D hull in counter-clockwise order
    return V[ConvexHull(V_float).vertices, :]
