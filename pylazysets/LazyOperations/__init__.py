# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the lazy operations MinkowskiSum, LinearMap, and ResetMap that evaluate the support of the
# result on demand from the support of their operands

import numpy as np

from pylazysets.common import (
    _check_bounds,
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    is_lazy_set,
)
from pylazysets.common.polytope_interface import sanitize_linear_map_matrix


def _lazy_translate(self, v):
    """Translate a lazy set by v

    Returns:
        MinkowskiSum: Lazy sum of self and the singleton {v}
    """
    from pylazysets.Singleton import Singleton

    return MinkowskiSum(self, Singleton(v))


class MinkowskiSum:
    r"""MinkowskiSum class for the lazy Minkowski sum :math:`X \oplus Y = \{x + y\ |\ x\in X, y\in Y\}`.

    Args:
        X (object): First set
        Y (object): Second set

    Raises:
        TypeError: When X or Y is not a set
        ValueError: Mismatch in dimensions
    """

    def __init__(self, X, Y):
        """Constructor for MinkowskiSum class"""
        if not (is_lazy_set(X) and is_lazy_set(Y)):
            raise TypeError(f"Expected X and Y to be sets. Got {type(X)} and {type(Y)}")
        elif X.dim != Y.dim:
            raise ValueError(f"Mismatch in dimensions (X.dim: {X.dim:d} and Y.dim: {Y.dim:d})")
        self._X, self._Y = X, Y

    @property
    def type_of_set(self):
        """Type of the set"""
        return "MinkowskiSum"

    @property
    def dim(self):
        """Dimension of the sum"""
        return self._X.dim

    @property
    def X(self):
        """First set"""
        return self._X

    @property
    def Y(self):
        """Second set"""
        return self._Y

    @property
    def is_empty(self):
        """The sum is empty if and only if one of the sets is empty"""
        return self._X.is_empty or self._Y.is_empty

    @property
    def is_bounded(self):
        """The sum of two non-empty sets is bounded if and only if both sets are bounded"""
        return self.is_empty or (self._X.is_bounded and self._Y.is_bounded)

    def _compute_support_vector_single_eta(self, d):
        return self._X.support_vector(d) + self._Y.support_vector(d)

    def _compute_support_function_single_eta(self, d):
        return self._X.support_function(d) + self._Y.support_function(d)

    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector
    translate = _lazy_translate

    def __str__(self):
        return f"MinkowskiSum in R^{self.dim:d} of {str(self._X):s} and {str(self._Y):s}"

    __repr__ = __str__


class LinearMap:
    r"""LinearMap class for the lazy linear map :math:`MX = \{Mx\ |\ x\in X\}`.

    Args:
        M (array_like): Matrix with X.dim columns
        X (object): Set to map

    Raises:
        TypeError: When X is not a set
        ValueError: When M does not have X.dim columns

    Notes:
        The support function satisfies :math:`\rho_{MX}(d) = \rho_X(M^\top d)`, and the support vector is
        :math:`M\sigma_X(M^\top d)`.
    """

    def __init__(self, M, X):
        """Constructor for LinearMap class"""
        if not is_lazy_set(X):
            raise TypeError(f"Expected X to be a set. Got {type(X)}")
        self._M = sanitize_linear_map_matrix(X, M)
        self._X = X

    @property
    def type_of_set(self):
        """Type of the set"""
        return "LinearMap"

    @property
    def dim(self):
        """Dimension of the image, i.e., the number of rows of M"""
        return self._M.shape[0]

    @property
    def M(self):
        """Matrix of the linear map"""
        return self._M

    @property
    def X(self):
        """Set to map"""
        return self._X

    @property
    def is_empty(self):
        """The image is empty if and only if X is empty"""
        return self._X.is_empty

    @property
    def is_bounded(self):
        """Check if the image is bounded

        Raises:
            NotImplementedError: When X is unbounded and M is not invertible
        """
        if self._X.is_bounded:
            return True
        elif self._M.shape[0] == self._M.shape[1] and np.linalg.matrix_rank(self._M) == self._M.shape[0]:
            return False
        raise NotImplementedError("Boundedness of a singular linear map of an unbounded set is not supported!")

    def _compute_support_vector_single_eta(self, d):
        return self._M @ self._X.support_vector(self._M.T @ d)

    def _compute_support_function_single_eta(self, d):
        return self._X.support_function(self._M.T @ d)

    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector
    translate = _lazy_translate

    def __str__(self):
        return f"LinearMap in R^{self.dim:d} of {str(self._X):s}"

    __repr__ = __str__


class ResetMap:
    """ResetMap class for the lazy reset of some coordinates of a set to constant values.

    Args:
        X (object): Set to reset
        resets (dict): Dictionary mapping a (zero-based) coordinate to its new value

    Raises:
        TypeError: When X is not a set
        IndexError: When a reset coordinate is out of bounds

    Notes:
        The reset map is the affine map x -> A x + b, where A is the identity matrix with the rows of the reset
        coordinates set to zero and b holds the reset values. The support vector along d queries X along d with the
        reset coordinates zeroed, and then overwrites the reset coordinates.
    """

    def __init__(self, X, resets):
        """Constructor for ResetMap class"""
        if not is_lazy_set(X):
            raise TypeError(f"Expected X to be a set. Got {type(X)}")
        self._X = X
        for i in resets:
            _check_bounds(X, i)
        self._resets = dict(resets)

    @property
    def type_of_set(self):
        """Type of the set"""
        return "ResetMap"

    @property
    def dim(self):
        """Dimension of the reset map"""
        return self._X.dim

    @property
    def X(self):
        """Set to reset"""
        return self._X

    @property
    def resets(self):
        """Dictionary mapping a coordinate to its new value"""
        return dict(self._resets)

    @property
    def is_empty(self):
        """The reset map is empty if and only if X is empty"""
        return self._X.is_empty

    @property
    def is_bounded(self):
        """Bounded if X is bounded. Otherwise, the support function of X must be finite along :math:`\\pm e_i` for every
        coordinate i that is not reset."""
        if self._X.is_bounded:
            return True
        for i in range(self.dim):
            if i in self._resets:
                continue
            e_i = np.zeros((self.dim,))
            e_i[i] = 1
            if self._X.support_function(e_i) == np.inf or self._X.support_function(-e_i) == np.inf:
                return False
        return True

    def get_A(self):
        """Matrix A of the affine map x -> A x + b"""
        A = np.eye(self.dim)
        for i in self._resets:
            A[i, i] = 0
        return A

    def get_b(self):
        """Vector b of the affine map x -> A x + b"""
        b = np.zeros((self.dim,))
        for i, value in self._resets.items():
            b[i] = value
        return b

    def _compute_support_vector_single_eta(self, d):
        d_kept = d.copy()
        for i in self._resets:
            d_kept[i] = 0
        support_vector = np.array(self._X.support_vector(d_kept), dtype=float)
        for i, value in self._resets.items():
            support_vector[i] = value
        return support_vector

    def _compute_support_function_single_eta(self, d):
        d_kept = d.copy()
        for i in self._resets:
            d_kept[i] = 0
        return self._X.support_function(d_kept) + sum(d[i] * value for i, value in self._resets.items())

    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector
    translate = _lazy_translate

    def __str__(self):
        return f"ResetMap in R^{self.dim:d} of {str(self._X):s}"

    __repr__ = __str__
