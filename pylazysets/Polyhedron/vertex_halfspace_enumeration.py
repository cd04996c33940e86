# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the methods for vertex-halfspace enumeration shared by the polyhedral set representations

import cdd  # pycddlib -- for vertex enumeration from H-representation
import numpy as np
from scipy.spatial import ConvexHull  # for finding minimal V-representation

from pylazysets.common.constants import PYLAZYSETS_ZERO


def get_cdd_polyhedron_from_V(V):
    """Get CDD polyhedron in generator form from given V

    Args:
        V (array_like): n_vertices times n matrix

    Raises:
        ValueError: When cdd fails to build the polyhedron

    Returns:
        cdd.Polyhedron: CDD Polyhedron
    """
    V = np.asarray(V).astype(float)
    n_vertices = V.shape[0]
    # t is 1 to indicate that all are vertices
    tV_list = np.hstack((np.ones((n_vertices, 1)), V)).tolist()
    tV_cdd = cdd.matrix_from_array(tV_list, rep_type=cdd.RepType.GENERATOR)
    try:
        return cdd.polyhedron_from_matrix(tV_cdd)
    except RuntimeError as err:
        raise ValueError("Computation of CDD polyhedron failed due to numerical inconsistency in vertex list") from err


def get_cdd_polyhedron_from_Ab(A, b):
    r"""Get CDD polyhedron in inequality form from given (A, b)

    Args:
        A (array_like): Inequality coefficient matrix A
        b (array_like): Inequality coefficient vector b

    Raises:
        ValueError: When cdd fails to build the polyhedron

    Returns:
        cdd.Polyhedron: CDD Polyhedron

    Notes:
        cdd uses the halfspace representation :math:`[b, -A]` where :math:`b - Ax \geq 0 \Leftrightarrow Ax \leq b`.
    """
    A = np.asarray(A).astype(float)
    b = np.asarray(b).astype(float)
    b_mA = np.hstack((np.array([b]).T, -A)).tolist()
    H_cdd = cdd.matrix_from_array(b_mA, rep_type=cdd.RepType.INEQUALITY)
    try:
        return cdd.polyhedron_from_matrix(H_cdd)
    except RuntimeError as err:
        raise ValueError("Computation of CDD polyhedron failed due to numerical inconsistency in (A, b)") from err


def _split_generators(tV_cdd_matrix, n):
    """Split the generator matrix [t V] into vertices (t = 1) and rays or lines (t = 0)"""
    tV = np.array(tV_cdd_matrix.array)
    if tV.size == 0:
        return np.empty((0, n)), np.empty((0, n)), False
    vertex_rows = tV[:, 0] != 0
    has_lines = len(tV_cdd_matrix.lin_set) > 0
    return tV[vertex_rows, 1:], tV[~vertex_rows, 1:], has_lines


def enumerate_vertices(A, b):
    """Enumerate the vertices of the bounded polyhedron {x | Ax <= b} using cdd.

    Args:
        A (numpy.ndarray): Inequality coefficient matrix A
        b (numpy.ndarray): Inequality coefficient vector b

    Raises:
        ValueError: Vertex enumeration yields rays, which indicates that the polyhedron is unbounded. Numerical issues
            may also be a culprit.

    Returns:
        numpy.ndarray: Matrix with a vertex in each row. It has no rows when the polyhedron is empty.
    """
    n = A.shape[1]
    if A.shape[0] == 0:
        raise ValueError("Vertex enumeration of an unconstrained set is not possible!")
    try:
        cdd_polyhedron = get_cdd_polyhedron_from_Ab(A, b)
        V, R, has_lines = _split_generators(cdd.copy_generators(cdd_polyhedron), n)
    except ValueError as err:
        raise ValueError("Computation of V-rep failed!") from err
    if R.shape[0] > 0 or has_lines:
        raise ValueError("Vertex enumeration yielded rays! Possibly due to numerical issues or unbounded polyhedron!")
    return V


def polyhedron_is_bounded(A, b):
    """Check whether {x | Ax <= b} is bounded, i.e., whether its generators have no rays and no lines.

    Returns:
        bool: True if the polyhedron is bounded (or empty)
    """
    n = A.shape[1]
    if n == 0:
        return True
    elif A.shape[0] == 0:
        return False
    cdd_polyhedron = get_cdd_polyhedron_from_Ab(A, b)
    V, R, has_lines = _split_generators(cdd.copy_generators(cdd_polyhedron), n)
    return V.shape[0] == 0 or (R.shape[0] == 0 and not has_lines)


def enumerate_halfspaces(V):
    """Enumerate the halfspaces of the convex hull of the rows of V using cdd.

    Args:
        V (numpy.ndarray): Matrix with a vertex in each row

    Raises:
        ValueError: When H-rep computation fails

    Returns:
        tuple: (A, b) such that conv(V) = {x | Ax <= b}. Equalities reported by cdd (for a convex hull that is not
        full-dimensional) are converted into a pair of opposing inequalities.
    """
    V = np.asarray(V).astype(float)
    try:
        cdd_polyhedron = get_cdd_polyhedron_from_V(V)
        H_cdd_matrix = cdd.copy_inequalities(cdd_polyhedron)
        cdd.matrix_canonicalize(H_cdd_matrix)  # Identify linear equalities if any
    except (ValueError, RuntimeError) as err:
        raise ValueError("Computation of H-rep failed!") from err
    return _Ab_from_cdd_inequalities(H_cdd_matrix, V.shape[1])


def _Ab_from_cdd_inequalities(H_cdd_matrix, n):
    H_cdd_array = np.array(H_cdd_matrix.array)
    if H_cdd_array.size == 0:
        return np.empty((0, n)), np.empty((0,))
    A_list, b_list = [], []
    for index, row in enumerate(H_cdd_array):
        b_row, A_row = row[0], -row[1:]
        if not (np.abs(A_row) > PYLAZYSETS_ZERO).any():
            # Trivial row (0 <= b) from the homogenization
            continue
        A_list.append(A_row)
        b_list.append(b_row)
        if index in H_cdd_matrix.lin_set:
            A_list.append(-A_row)
            b_list.append(-b_row)
    if len(A_list) == 0:
        return np.empty((0, n)), np.empty((0,))
    return np.array(A_list), np.array(b_list)


def minimal_halfspaces(A, b):
    """Remove any redundant inequalities from (A, b) using cdd.

    Raises:
        ValueError: When minimal H-Rep computation fails

    Returns:
        tuple: (A, b) without redundant rows
    """
    try:
        cdd_polyhedron = get_cdd_polyhedron_from_Ab(A, b)
        H_cdd_matrix = cdd.copy_inequalities(cdd_polyhedron)
        cdd.matrix_canonicalize(H_cdd_matrix)
    except (ValueError, RuntimeError) as err:
        raise ValueError("Computation of minimal H-rep failed!") from err
    return _Ab_from_cdd_inequalities(H_cdd_matrix, A.shape[1])


def minimal_vertices(V, prefer_qhull_over_cdd=True):
    """Remove any redundant vertices from V.

    Args:
        V (numpy.ndarray): Matrix with a vertex in each row
        prefer_qhull_over_cdd (bool, optional): When True, use qhull for full-dimensional sets. Otherwise, we use cdd.

    Raises:
        ValueError: When minimal V-Rep computation fails!

    Returns:
        numpy.ndarray: Vertices of the convex hull of V
    """
    V = np.asarray(V).astype(float)
    n_vertices, n = V.shape
    if n_vertices <= 1:
        return V
    elif n == 1:
        V_minimal = np.vstack((np.min(V, keepdims=True), np.max(V, keepdims=True)))
        if np.diff(V_minimal, axis=0) <= PYLAZYSETS_ZERO:
            # Extrema are same. So pick only the top row.
            return V_minimal[:1, :]
        return V_minimal
    elif prefer_qhull_over_cdd and np.linalg.matrix_rank(V[1:, :] - V[0, :]) == n:
        # Indices of the unique vertices forming the convex hull:
        return V[ConvexHull(V).vertices, :]
    else:
        try:
            cdd_polyhedron = get_cdd_polyhedron_from_V(V)
            tV_cdd_matrix = cdd.copy_generators(cdd_polyhedron)
            cdd.matrix_canonicalize(tV_cdd_matrix)  # Minimize redundant vertices
        except (ValueError, RuntimeError) as err:
            raise ValueError("Computation of minimal V-rep failed!") from err
        V_minimal, _, _ = _split_generators(tV_cdd_matrix, n)
        return V_minimal
