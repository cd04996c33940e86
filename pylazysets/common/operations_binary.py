# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Define the concrete binary operations on sets, namely Minkowski difference and set inclusion

import itertools
import warnings

import numpy as np
from scipy.special import comb

from pylazysets.common import (
    is_lazy_set,
    is_polyhedral,
    is_polytopic,
    is_singleton,
    is_zero_set,
    is_zonotopic,
)
from pylazysets.common.comparisons import _leq, isapproxzero
from pylazysets.common.constants import ABSZTOL_FLOAT, PYLAZYSETS_ZERO, ZONOTOPE_DIFFERENCE_COMBINATIONS_WARN


def _check_same_dimension(P, Q):
    if not (is_lazy_set(P) and is_lazy_set(Q)):
        raise TypeError(f"Expected two sets. Got {type(P)} and {type(Q)}")
    elif P.dim != Q.dim:
        raise ValueError(
            "the Minkowski difference only applies to sets of the same dimension, but the arguments have dimension "
            f"{P.dim:d} and {Q.dim:d}"
        )


def minkowski_difference(P, Q):
    r"""Compute the Minkowski difference (geometric difference) :math:`P\ominus Q = \{z\ |\ z + v \in P,\ \forall v\in
    Q\}`.

    Args:
        P (object): Set to subtract from. Must be polyhedral unless Q is a singleton or both sets are zonotopic.
        Q (object): Bounded set that is subtracted from P

    Raises:
        TypeError: When P or Q is not a set
        ValueError: Mismatch in dimensions
        ValueError: When P is not polyhedral or Q is not bounded (see :meth:`minkowski_difference_polyhedral`)

    Returns:
        object: The result depends on the operands

        * Q is a ZeroSet: P itself.
        * Q is a singleton {v}: P translated by -v.
        * P and Q are zonotopic and the generators of P span the ambient space: an HPolytope from
          :meth:`minkowski_difference_zonotopes`.
        * Otherwise: an HPolytope (P bounded) or an HPolyhedron (P unbounded) from
          :meth:`minkowski_difference_polyhedral`.
    """
    _check_same_dimension(P, Q)
    if is_zero_set(Q):
        return P
    elif is_singleton(Q):
        return P.translate(-Q.element())
    elif is_zonotopic(P) and is_zonotopic(Q) and _generators_span_space(P):
        return minkowski_difference_zonotopes(P, Q)
    else:
        return minkowski_difference_polyhedral(P, Q)


pontryagin_difference = minkowski_difference


def minkowski_difference_polyhedral(P, Q):
    r"""Compute the Minkowski difference of a polyhedral set and a bounded set by offsetting each halfspace.

    Args:
        P (object): Polyhedral set :math:`\{z\ |\ s_i^\top z\leq r_i,\ i=1,\ldots,N\}`
        Q (object): Bounded set

    Raises:
        ValueError: When P is not polyhedral
        ValueError: When Q is not bounded
        ValueError: Mismatch in dimensions

    Returns:
        HPolytope | HPolyhedron: The set :math:`\{z\ |\ s_i^\top z\leq r_i - \rho_Q(s_i),\ i=1,\ldots,N\}`. An HPolytope is
        returned when P is bounded, and an HPolyhedron otherwise.

    Notes:
        This function implements Theorem 2.3 in I. Kolmanovsky and E. G. Gilbert, "Theory and computation of
        disturbance invariant sets for discrete-time linear systems", Mathematical Problems in Engineering, 1998.
    """
    from pylazysets.Polyhedron import HPolyhedron, HPolytope

    _check_same_dimension(P, Q)
    if not is_polyhedral(P):
        raise ValueError(
            "this implementation requires that the first argument is polyhedral; try overapproximating with an "
            "HPolyhedron"
        )
    elif not Q.is_bounded:
        raise ValueError("this implementation requires that the second argument is bounded, but it is not")
    A, b = P.tosimplehrep()
    if A.shape[0] == 0:
        return HPolyhedron(dim=P.dim)
    b_P_minus_Q = np.array([b_i - Q.support_function(a_i) for a_i, b_i in zip(A, b)], dtype=float)
    if P.is_bounded:
        return HPolytope(A=A, b=b_P_minus_Q)
    else:
        return HPolyhedron(A=A, b=b_P_minus_Q)


def _generators_span_space(Z):
    G = np.asarray(Z.genmat()).astype(float)
    return G.shape[1] > 0 and np.linalg.matrix_rank(G) == Z.dim


def strictly_increasing_indices(p, k):
    """Iterate over all strictly increasing k-tuples of indices in {0, ..., p - 1} in lexicographic order

    Args:
        p (int): Number of indices
        k (int): Length of each tuple

    Returns:
        iterator: Iterator over tuples
    """
    return itertools.combinations(range(p), k)


def cross_product(M):
    r"""Generalized cross product of the n - 1 columns of a n x (n - 1) matrix M.

    Args:
        M (array_like): Matrix with n rows and n - 1 columns

    Raises:
        ValueError: When M does not have one more row than columns

    Returns:
        numpy.ndarray: Vector v orthogonal to every column of M with :math:`v_i = (-1)^{n + i + 1}\det(M_{-i})` for
        i = 0, ..., n - 1, where :math:`M_{-i}` is M without the i-th row. v is the zero vector when the columns of M are
        linearly dependent.
    """
    M = np.atleast_2d(np.asarray(M).astype(float))
    n = M.shape[0]
    if M.shape[1] != n - 1:
        raise ValueError(f"Expected a matrix with {n - 1:d} columns. Got {M.shape[1]:d} columns.")
    elif n == 1:
        return np.ones((1,))
    v = np.zeros((n,))
    for i in range(n):
        minor = np.delete(M, i, axis=0)
        v[i] = (-1) ** (n + i + 1) * np.linalg.det(minor)
    return v


def minkowski_difference_zonotopes(Z1, Z2):
    r"""Compute the Minkowski difference of two zonotopic sets by enumerating the facet normals of Z1.

    Args:
        Z1 (object): Zonotopic set with center c1 and generators G1 (n x p) that span the ambient space
        Z2 (object): Zonotopic set with center c2 and generators G2

    Raises:
        ValueError: Mismatch in dimensions
        ValueError: When the generators of Z1 do not span the ambient space

    Warns:
        UserWarning: When the number of generator combinations exceeds ZONOTOPE_DIFFERENCE_COMBINATIONS_WARN

    Returns:
        HPolytope: Minkowski difference Z1 - Z2

    Notes:
        This function implements Theorem 3 in M. Althoff, "On computing the Minkowski difference of zonotopes", 2016.
        Each facet normal of Z1 is the generalized cross product of n - 1 of its generators. For each of the
        :math:`\binom{p}{n-1}` combinations (in lexicographic order) with a cross product :math:`c^+` that is
        non-zero relative to the product of the norms of the selected generators (normalized), two halfspaces
        :math:`(c^+, c^{+\top}\Delta c + \Delta\Delta d)` and
        :math:`(-c^+, -c^{+\top}\Delta c + \Delta\Delta d)` are collected, where :math:`\Delta c = c_1 - c_2`,
        :math:`\Delta\Delta d = \|G_1^\top c^+\|_1 - \|G_2^\top c^+\|_1`. The number of combinations grows quickly with
        the dimension, and this approach does not scale to high dimensions.
    """
    from pylazysets.HalfSpace import HalfSpace
    from pylazysets.Polyhedron import HPolytope

    _check_same_dimension(Z1, Z2)
    Gm = np.asarray(Z1.genmat()).astype(float)
    n, p = Gm.shape
    if not _generators_span_space(Z1):
        raise ValueError(f"Expected the generators of the first zonotope to span R^{n:d}")
    Gs = np.asarray(Z2.genmat()).astype(float)
    delta_c = np.asarray(Z1.center()).astype(float) - np.asarray(Z2.center()).astype(float)

    n_combinations = comb(p, n - 1, exact=True)
    if n_combinations > ZONOTOPE_DIFFERENCE_COMBINATIONS_WARN:
        warnings.warn(
            f"Minkowski difference of zonotopes enumerates {n_combinations:d} generator combinations! This may be slow.",
            UserWarning,
        )

    constraints = []
    for columns in strictly_increasing_indices(p, n - 1):
        selected_generators = Gm[:, list(columns)]
        c_plus = cross_product(selected_generators)
        # |c_plus| is at most the product of the column norms (Hadamard)
        scale = np.prod(np.linalg.norm(selected_generators, ord=2, axis=0))
        if isapproxzero(np.linalg.norm(c_plus, ord=2), ztol=ABSZTOL_FLOAT * scale):
            continue
        c_plus = c_plus / np.linalg.norm(c_plus, ord=2)

        delta_d = np.sum(np.abs(Gm.T @ c_plus))
        delta_d_trans = np.sum(np.abs(Gs.T @ c_plus))

        c_plus_delta_c = c_plus @ delta_c
        delta_delta_d = delta_d - delta_d_trans
        constraints.append(HalfSpace(a=c_plus, b=c_plus_delta_c + delta_delta_d))
        constraints.append(HalfSpace(a=-c_plus, b=-c_plus_delta_c + delta_delta_d))
    return HPolytope(constraints=constraints)


def is_subset(X, Y):
    r"""Check whether :math:`X\subseteq Y`.

    Args:
        X (object): Set
        Y (object): Set

    Raises:
        TypeError: When X or Y is not a set
        ValueError: Mismatch in dimensions
        ValueError: When Y is not polyhedral and X is not polytopic

    Returns:
        bool: True if X is a subset of Y

    Notes:
        - An empty X is a subset of any Y, and a non-empty X is not a subset of an empty Y.
        - When Y is polyhedral, we check :math:`\rho_X(a_i)\leq b_i` for every constraint :math:`a_i^\top x\leq b_i` of
          Y with an absolute tolerance of PYLAZYSETS_ZERO.
        - Otherwise, when X is polytopic, we check that every vertex of X lies in Y.
    """
    if not (is_lazy_set(X) and is_lazy_set(Y)):
        raise TypeError(f"Expected two sets. Got {type(X)} and {type(Y)}")
    elif X.dim != Y.dim:
        raise ValueError(f"Mismatch in dimensions (X.dim: {X.dim:d} and Y.dim: {Y.dim:d})")
    elif X.is_empty:
        return True
    elif Y.is_empty:
        return False
    elif is_polyhedral(Y):
        return all(
            _leq(X.support_function(constraint.a), constraint.b, atol=PYLAZYSETS_ZERO)
            for constraint in Y.constraints_list()
        )
    elif is_polytopic(X):
        return all(Y.contains(vertex) for vertex in X.vertices_list())
    else:
        raise ValueError(f"Inclusion check of {str(X):s} in {str(Y):s} is not supported!")


def isequivalent(X, Y):
    """Check whether two sets are equal, i.e., each set is a subset of the other. See :meth:`is_subset`."""
    return is_subset(X, Y) and is_subset(Y, X)
