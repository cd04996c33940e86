# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Describe various methods that are common to different set representations, and the capability checks
# that replace a deep type hierarchy.

import warnings

import cvxpy as cp
import numpy as np

from pylazysets.common.constants import PYLAZYSETS_ZERO


###################
# Capability checks
###################
def is_lazy_set(Q):
    """Check if the object provides the base capability of a set (dim, support_function, support_vector)

    Args:
        Q (object): Object to check

    Returns:
        bool: Returns True if Q is a set, False otherwise
    """
    return all(hasattr(Q, attr) for attr in ("dim", "support_function", "support_vector"))


def is_polytopic(Q):
    """Check if the set is a polytope, i.e., a bounded set with finitely many vertices

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set provides vertices_list, False otherwise
    """
    return is_lazy_set(Q) and hasattr(Q, "vertices_list")


def is_polyhedral(Q):
    """Check if the set is polyhedral, i.e., it can be described by finitely many halfspaces

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set provides constraints_list, False otherwise
    """
    return is_lazy_set(Q) and hasattr(Q, "constraints_list")


def is_hyperrectangular(Q):
    """Check if the set is an axis-aligned box

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set provides radius_hyperrectangle, False otherwise
    """
    return is_lazy_set(Q) and hasattr(Q, "radius_hyperrectangle")


def is_singleton(Q):
    """Check if the set has a single element

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set provides element, False otherwise
    """
    return is_lazy_set(Q) and hasattr(Q, "element")


def is_zero_set(Q):
    """Check if the set is the set containing only the origin

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set is a ZeroSet, False otherwise
    """
    return is_singleton(Q) and getattr(Q, "type_of_set", None) == "ZeroSet"


def is_zonotopic(Q):
    """Check if the set is zonotopic, i.e., it is described by a center and a generator matrix

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set provides genmat, False otherwise
    """
    return is_lazy_set(Q) and hasattr(Q, "genmat") and hasattr(Q, "center")


def is_empty_set(Q):
    """Check if the set is an EmptySet

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set is an EmptySet, False otherwise
    """
    return is_lazy_set(Q) and getattr(Q, "type_of_set", None) == "EmptySet"


##############
# Sanitization
##############
def sanitize_vector(x, name="x"):
    """Sanitize a vector into a 1D numpy array.

    Args:
        x (array_like): Vector to sanitize
        name (str, optional): Name of the vector used in error messages. Defaults to "x".

    Raises:
        ValueError: When x is not convertible to a 1D numpy array free from NaNs

    Returns:
        numpy.ndarray: 1D array. Arrays of exact numbers (fractions.Fraction) retain the object dtype, and the rest are
        converted to float.
    """
    try:
        x = np.atleast_1d(np.squeeze(np.asarray(x)))
        if x.dtype != object:
            x = x.astype(float)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Expected {name:s} to be convertible into a 1D numpy array") from err
    if x.ndim != 1:
        raise ValueError(f"Expected {name:s} to be a 1D array. Got {np.array2string(np.array(x)):s}")
    elif x.dtype != object and np.any(np.isnan(x)):
        raise ValueError(f"Expected {name:s} to be free from NaNs. Got {np.array2string(np.array(x)):s}")
    return x


def sanitize_direction(self, d):
    """Sanitize a direction for a support function or support vector query of the set self.

    Args:
        d (array_like): Direction

    Raises:
        ValueError: Mismatch in dimension of d and self.dim

    Returns:
        numpy.ndarray: 1D direction vector
    """
    d = sanitize_vector(d, name="d")
    if d.size != self.dim:
        raise ValueError(
            f"cannot compute the support of a {self.dim:d}-dimensional set along a vector of length {d.size:d}"
        )
    return d


def sanitize_Ab(A, b):
    """Sanitize and check if (`A`, `b`) to make a valid halfspace combination

    Args:
        A (array_like): Can be numpy arrays, list, or tuples
        b (array_like): Can be numpy arrays, list, or tuples

    Raises:
        ValueError: A is not 2D numpy array free from NaNs and inf
        ValueError: b is not 1D numpy array free from NaNs

    Returns:
        (numpy.ndarray, numpy.ndarray): 2D numpy arrays that is sanitized for `A`, and 1D numpy array that is sanitized
            for `b`
    """
    try:
        A = np.atleast_2d(A).astype(float)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Can not convert A into a float array. Got {np.array2string(np.array(A)):s}") from err
    try:
        b = np.atleast_1d(np.squeeze(b)).astype(float)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Can not convert b into a float array. Got {np.array2string(np.array(b)):s}") from err
    if A.ndim != 2 or b.ndim != 1:
        raise ValueError(
            "Expected A, b to be a 2D, 1D arrays! "
            f"Got A: {np.array2string(np.array(A)):s} and b: {np.array2string(np.array(b)):s}"
        )
    elif np.any(np.isnan(A)) or np.any(np.isnan(b)):
        raise ValueError(
            f"Expected A, b to be from NaNs. Got {np.array2string(np.array(A)):s}, {np.array2string(np.array(b)):s}"
        )
    elif np.any(np.isinf(A)):
        raise ValueError(f"Expected A to be from inf. Got {np.array2string(np.array(A)):s}!")
    elif A.shape[0] != b.shape[0] and not (A.shape[0] == 1 and b.shape[0] == 0):
        raise ValueError(f"A and b has different number of rows! A: {A.shape[0]:d} and b: {b.shape[0]:d}.")
    return A, b


def remove_trivial_rows_in_Ab(A, b, enable_warning=True):
    """Remove rows of (A, b) with an all-zero row in A or an infinite entry in b.

    Args:
        A (numpy.ndarray): 2D numpy array
        b (numpy.ndarray): 1D numpy array
        enable_warning (bool, optional): Enables the UserWarning. Defaults to True.

    Raises:
        UserWarning: When some rows are removed

    Returns:
        (numpy.ndarray, numpy.ndarray): (A, b) with the valid rows

    Notes:
        A row with a zero normal vector is either trivially satisfied (b >= 0) or makes the set empty (b < 0). The
        latter case is retained so that emptiness is preserved.
    """
    zero_normal = ~(np.abs(A) > PYLAZYSETS_ZERO).any(axis=1)
    valid_rows = np.bitwise_and(b < np.inf, ~np.bitwise_and(zero_normal, b >= -PYLAZYSETS_ZERO))
    if enable_warning and sum(valid_rows) != A.shape[0]:
        warnings.warn("Removed some rows in A that had all zeros | b that had np.inf!", UserWarning)
    return A[valid_rows, :], b[valid_rows]


def sanitize_Gc(G, c):
    """Sanitize and check if (`G`, `c`) to make a valid zonotope generator combination

    Args:
        G (array_like): Can be numpy arrays, list, or tuples or None
        c (array_like): Can be numpy arrays, list, or tuples

    Raises:
        ValueError: G is not 2D numpy array free from NaNs
        ValueError: c is not 1D numpy array free from NaNs

    Returns:
        tuple: A tuple with two items:
            # G (numpy.ndarray): 2D generator matrix with as many rows as c.
            # c (numpy.ndarray): 1D center vector.
    """
    c = sanitize_vector(c, name="c")
    if G is None:
        return np.empty((c.size, 0), dtype=c.dtype), c
    try:
        G = np.asarray(G)
        if G.dtype != object:
            G = G.astype(float)
        if G.ndim == 1 and c.size == 1:
            G = G[np.newaxis, :]
        G = np.atleast_2d(G)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Expected G to be a 2D matrix. Got {np.array2string(np.array(G)):s}") from err
    if G.ndim != 2:
        raise ValueError(f"Expected G to be a 2D matrix. Got {np.array2string(np.array(G)):s}")
    elif G.size > 0 and G.shape[0] != c.shape[0]:
        raise ValueError(f"G and c has different number of rows! G: {G.shape[0]:d} and c: {c.shape[0]:d}.")
    elif G.size == 0:
        G = np.empty((c.size, 0), dtype=G.dtype)
    elif G.dtype != object and (np.any(np.isinf(G)) or np.any(np.isnan(G))):
        raise ValueError(f"Expected G to be free from NaNs and infs. Got {np.array2string(np.array(G)):s}")
    return G, c


def sign_vector(d):
    """Elementwise sign of a vector that is also valid for exact numbers (fractions.Fraction)

    Args:
        d (numpy.ndarray): 1D vector

    Returns:
        numpy.ndarray: Vector with entries in {-1, 0, 1}
    """
    return (d > 0).astype(int) - (d < 0).astype(int)


def _check_bounds(self, i):
    """Check that i is a valid (zero-based) coordinate index of the set self

    Raises:
        IndexError: When i is not in the integer interval [0, self.dim - 1]
    """
    if not 0 <= i < self.dim:
        raise IndexError(f"Index {i} is out of bounds for a set of dimension {self.dim:d}")


def raise_error_on_set_membership(Q):
    """Raise an error when a set is tested for membership (`Q in X`) instead of set inclusion

    Raises:
        ValueError: When Q is a set
    """
    if is_lazy_set(Q):
        if is_singleton(Q):
            guidance = (
                "either check for set inclusion, as in `is_subset(S, X)`, or check for membership, as in "
                "`S.element() in X` (the results are equivalent, but the implementations may differ)"
            )
        else:
            guidance = "check for set inclusion, as in `is_subset(S, X)`"
        raise ValueError(f"cannot make a point-in-set check if the left-hand side is a set; {guidance:s}")


#############################
# Support function evaluation
#############################
def convex_set_support_function(self, d):
    r"""Evaluate the support function :math:`\rho_{\mathcal{P}}(d) = \sup_{x\in\mathcal{P}} d^\top x` of a set.

    Args:
        d (array_like): Direction. Vector of length self.dim.

    Raises:
        ValueError: Mismatch in the dimension of d

    Returns:
        float: Support function evaluation
    """
    d = sanitize_direction(self, d)
    return self._compute_support_function_single_eta(d)


def convex_set_support_vector(self, d):
    r"""Evaluate the support vector :math:`\nu_{\mathcal{P}}(d) \in \arg\max_{x\in\mathcal{P}} d^\top x` of a set.

    Args:
        d (array_like): Direction. Vector of length self.dim.

    Raises:
        ValueError: Mismatch in the dimension of d

    Returns:
        numpy.ndarray: Support vector as a 1D numpy array
    """
    d = sanitize_direction(self, d)
    return self._compute_support_vector_single_eta(d)


def _compute_support_function_from_support_vector(self, d):
    """Private function to compute the support function from the support vector. This function is not to be called
    directly. Instead, call `support_function` method."""
    return d @ self._compute_support_vector_single_eta(d)


def convex_set_support(self, eta):
    r"""Evaluates the support function and support vector of a set along multiple directions.

    Args:
        eta (array_like): Support directions. Matrix (N times self.dim), where each row is a support direction.

    Raises:
        ValueError: Set is empty
        ValueError: Mismatch in eta dimension
        ValueError: eta is not convertible into a 2D array

    Returns:
        tuple: A tuple with two items:
            1. support_function_evaluations (numpy.ndarray): Support function evaluation(s) as a 1D numpy.ndarray.
               Vector (N,) with as many rows as eta.
            2. support_vectors (numpy.ndarray): Support vectors as a 2D numpy.ndarray. Matrix N x self.dim with as many
               rows as eta.
    """
    if self.is_empty:
        raise ValueError("Set must be non-empty for support function evaluation.")
    eta = np.atleast_2d(eta)
    if eta.ndim > 2:
        raise ValueError("Expected eta to be a 1D/2D numpy array")
    elif eta.shape[1] != self.dim:
        raise ValueError(f"eta dim. ({eta.shape[1]:d}), no. of columns, is different from set dimension ({self.dim:d})")
    support_function_list = []
    support_vector_list = []
    for single_eta in eta:
        support_vector = self.support_vector(single_eta)
        support_function_list.append(self.support_function(single_eta))
        support_vector_list.append(support_vector)
    return np.array(support_function_list), np.array(support_vector_list)


def convex_set_minimum_volume_circumscribing_rectangle(self):
    r"""Compute the minimum volume circumscribing rectangle for a set.

    Raises:
        ValueError: When set is empty

    Returns:
        tuple: A tuple of two elements
            - lb (numpy.ndarray): Lower bound :math:`l` on the set,
              :math:`\mathcal{P}\subseteq\{l\}\oplus\mathbb{R}_{\geq 0}`.
            - ub (numpy.ndarray): Upper bound :math:`u` on the set,
              :math:`\mathcal{P}\subseteq\{u\}\oplus(-\mathbb{R}_{\geq 0})`.

    Notes:
        This function computes the lower/upper bound by an element-wise support computation (2n support function
        evaluations), where n is attr:`self.dim`.
    """
    if self.is_empty:
        raise ValueError("Can not compute circumscribing rectangle for an empty set!")
    else:
        lb = -self.support(-np.eye(self.dim))[0]
        ub = self.support(np.eye(self.dim))[0]
    return lb, ub


#######################
# Optimization via CVXPY
#######################
def minimize(self, x, objective_to_minimize, cvxpy_args, task_str=""):
    """Solve a convex program with CVXPY objective subject to containment constraints.

    Args:
        x (cvxpy.Variable): CVXPY variable to be optimized
        objective_to_minimize (cvxpy.Expression): CVXPY expression to be minimized
        cvxpy_args (dict): CVXPY arguments to be passed to the solver
        task_str (str, optional): Task string to be used in error messages. Defaults to ''.

    Raises:
        NotImplementedError: Unable to solve problem using CVXPY

    Returns:
        tuple: A tuple with three items:
            #. x.value (numpy.ndarray): Optimal value of x. np.nan * np.ones((self.dim,)) if the problem is not solved.
            #. problem.value (float): Optimal value of the convex program. np.inf if the problem is infeasible, -np.inf
               if problem is unbounded, and finite otherwise.
            #. problem_status (str): Status of the problem

    Notes:
        This function uses :meth:`containment_constraints` to obtain the list of CVXPY expressions that form the
        containment constraints on x.
    """
    containment_constraints = self.containment_constraints(x)
    problem = cp.Problem(cp.Minimize(objective_to_minimize), containment_constraints)
    try:
        problem.solve(**cvxpy_args)
    except cp.error.SolverError as err:
        raise NotImplementedError(f"Unable to solve the task ({task_str:s}). CVXPY returned error: {str(err)}") from err
    if problem.status in [cp.OPTIMAL, cp.OPTIMAL_INACCURATE]:
        return x.value, problem.value, problem.status
    elif problem.status in [cp.UNBOUNDED, cp.UNBOUNDED_INACCURATE]:
        return np.nan * np.ones((self.dim,)), -np.inf, problem.status
    elif problem.status in [cp.INFEASIBLE, cp.INFEASIBLE_INACCURATE]:
        return np.nan * np.ones((self.dim,)), np.inf, problem.status
    else:
        # Should never happen!
        raise NotImplementedError(
            f"Could not solve the task ({task_str:s}), due to an unhandled status: {problem.status:s}."
        )


###############
# Test helpers
###############
def check_matrices_are_equal_ignoring_row_order(A, B):
    """Check matrices are equal while ignoring row order

    Args:
        A (array_like): Matrix 1
        B (array_like): Matrix 2

    Returns:
        bool: A == B

    Notes:
        isclose does element-wise comparison, all with axis=1, provides a row-wise test, and finally any checks for some
        row where row-wise match is true
    """
    A = np.array(A).astype(float)
    B = np.array(B).astype(float)
    return A.shape == B.shape and sum([np.any(np.all(np.isclose(row, B), axis=1)) for row in A]) == B.shape[0]
