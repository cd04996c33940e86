# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Define the default methods for sets that are polytopes (bounded sets with finitely many vertices). A
# concrete polytope needs to provide only vertices_list (and constraints_list for is_universal).

import numpy as np
from scipy.spatial import ConvexHull

from pylazysets.common import sanitize_vector


def polytope_is_empty(self):
    """Check whether a polytope is empty.

    Returns:
        bool: True if the polytope has no vertices, and False otherwise.
    """
    return len(self.vertices_list()) == 0


def polytope_is_universal(self, witness=False):
    """Check whether a polytope is universal.

    Args:
        witness (bool, optional): When True, compute a witness. Defaults to False.

    Returns:
        bool | tuple: False when witness is False. Otherwise, a tuple (False, v) where v is a point not in the polytope.

    Notes:
        A witness is obtained from the first constraint of the polytope. A polytope without constraints should not
        happen, and we return (True, empty vector) for this case.
    """
    if witness:
        constraints = self.constraints_list()
        if len(constraints) == 0:
            return True, np.empty((0,))
        return constraints[0].is_universal(witness=True)
    else:
        return False


def tosimplehrep(self):
    """Return the simple halfspace representation (A, b) of a polyhedral set from its constraints_list.

    Returns:
        tuple: A tuple with two items:
            #. A (numpy.ndarray): Matrix of normal vectors (one per row)
            #. b (numpy.ndarray): Vector of offsets
    """
    constraints = self.constraints_list()
    if len(constraints) == 0:
        return np.empty((0, self.dim)), np.empty((0,))
    A = np.array([constraint.a for constraint in constraints])
    b = np.array([constraint.b for constraint in constraints])
    return A, b


def sanitize_linear_map_matrix(self, M):
    """Sanitize M for the linear map M times self.

    Raises:
        TypeError: When M can not be converted into a 2D array
        ValueError: When M does not have self.dim columns

    Returns:
        numpy.ndarray: 2D matrix
    """
    try:
        M = np.asarray(M)
        if M.dtype != object:
            M = M.astype(float)
        M = np.atleast_2d(M)
    except (TypeError, ValueError) as err:
        raise TypeError("Expected M to be 2D array_like that can be converted to float!") from err
    if M.ndim > 2:
        raise ValueError(f"M is must be convertible into a 2D numpy.ndarray. But got {M.ndim:d}D array.")
    elif M.shape[1] != self.dim:
        raise ValueError(f"Expected M to have {self.dim:d} columns. M: {M.shape} matrix")
    return M


def _linear_map_vrep(self, M, apply_convex_hull=False):
    r"""Apply the linear map M to each vertex of the polytope.

    Args:
        M (array_like): Matrix with self.dim columns
        apply_convex_hull (bool, optional): When True, the vertices of a polytope of dimension 3 or more are reduced to
            the vertices of their convex hull. Defaults to False.

    Returns:
        Interval | VPolygon | VPolytope: An Interval when M has one row, a VPolygon when M has two rows, and a VPolytope
        otherwise. An EmptySet is returned when the polytope is empty.
    """
    M = sanitize_linear_map_matrix(self, M)
    n_output_dims = M.shape[0]
    V = self.vertices_list()
    if len(V) == 0:
        from pylazysets.EmptySet import EmptySet

        return EmptySet(n_output_dims)
    mapped_V = np.array([M @ v for v in V])
    return _polytope_from_vertices_for_output_dimension(mapped_V, n_output_dims, apply_convex_hull)


def _polytope_from_vertices_for_output_dimension(V, n_output_dims, apply_convex_hull=False):
    from pylazysets.Hyperrectangle import Interval
    from pylazysets.VPolytope import VPolygon, VPolytope

    if n_output_dims == 1:
        # Sorting the scalars is the convex hull in 1D
        sorted_V = sorted(V[:, 0])
        return Interval(lo=sorted_V[0], hi=sorted_V[-1])
    elif n_output_dims == 2:
        return VPolygon(V=V)
    else:
        mapped_polytope = VPolytope(V=V)
        if apply_convex_hull:
            mapped_polytope.minimize_V_rep()
        return mapped_polytope


def linear_map_of_constraints(M, A, b):
    r"""Compute the halfspace representation of :math:`\{Mx: Ax\leq b\}` for an invertible matrix M.

    Args:
        M (numpy.ndarray): Square matrix
        A (numpy.ndarray): Matrix of normal vectors
        b (numpy.ndarray): Vector of offsets

    Raises:
        ValueError: When M is not square or not invertible

    Returns:
        tuple: (A M^{-1}, b) since :math:`\{Mx: Ax\leq b\} = \{y: AM^{-1}y\leq b\}`.
    """
    if M.shape[0] != M.shape[1]:
        raise ValueError(f"Expected M to be a square matrix. Got {M.shape}!")
    try:
        M_inv = np.linalg.inv(M.astype(float))
    except np.linalg.LinAlgError as err:
        raise ValueError("Expected M to be invertible!") from err
    return A @ M_inv, b


def _linear_map_hrep(self, M):
    """Compute the halfspace representation (A, b) of M times a polytope.

    Notes:
        For an invertible M, the constraints are mapped directly. Otherwise, the vertices are mapped and a halfspace
        enumeration is performed using cdd.
    """
    from pylazysets.Polyhedron.vertex_halfspace_enumeration import enumerate_halfspaces

    if M.shape[0] == M.shape[1] and np.linalg.matrix_rank(M.astype(float)) == M.shape[0]:
        A, b = self.tosimplehrep()
        return linear_map_of_constraints(M, A, b)
    else:
        mapped_V = np.array([M @ v for v in self.vertices_list()]).astype(float)
        return enumerate_halfspaces(mapped_V)


def _linear_map_hrep_helper(self, M):
    """Apply the linear map M to a polytope in halfspace representation.

    Args:
        M (array_like): Matrix with self.dim columns

    Returns:
        Interval | HPolygon | HPolytope: An Interval when M has one row, an HPolygon when M has two rows, and an
        HPolytope otherwise. An EmptySet is returned when the polytope is empty.
    """
    from pylazysets.EmptySet import EmptySet
    from pylazysets.Hyperrectangle import Interval
    from pylazysets.Polyhedron import HPolygon, HPolytope

    M = sanitize_linear_map_matrix(self, M)
    n_output_dims = M.shape[0]
    if self.is_empty:
        return EmptySet(n_output_dims)
    A, b = _linear_map_hrep(self, M)
    if n_output_dims == 1:
        upper_bounds = [b_i / a_i[0] for a_i, b_i in zip(A, b) if a_i[0] > 0]
        lower_bounds = [b_i / a_i[0] for a_i, b_i in zip(A, b) if a_i[0] < 0]
        return Interval(lo=max(lower_bounds), hi=min(upper_bounds))
    elif n_output_dims == 2:
        return HPolygon(A=A, b=b)
    else:
        return HPolytope(A=A, b=b)


def polytope_volume(self):
    """Compute the volume of the polytope using QHull

    Returns:
        float: Volume of the polytope

    Notes:
        - Returns 0 when the polytope is empty or not full-dimensional.
        - Performs a vertex enumeration when the polytope is in H-rep.
    """
    V = np.array(self.vertices_list()).astype(float)
    if V.shape[0] == 0:
        return 0.0
    elif self.dim == 1:
        return float(np.max(V) - np.min(V))
    elif np.linalg.matrix_rank(V[1:, :] - V[0, :]) < self.dim:
        return 0.0
    else:
        return float(ConvexHull(points=V).volume)


def polytope_translate_vertices(V, v):
    """Translate each row of V by v

    Returns:
        numpy.ndarray: Translated vertices
    """
    v = sanitize_vector(v, name="v")
    if V.shape[0] > 0 and v.size != V.shape[1]:
        raise ValueError(f"Expected a translation vector of length {V.shape[1]:d}. Got {v.size:d}")
    return V + v
