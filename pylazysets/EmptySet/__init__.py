# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the EmptySet class

import numpy as np

from pylazysets.common import raise_error_on_set_membership
from pylazysets.common.polytope_interface import sanitize_linear_map_matrix


class EmptySet:
    """EmptySet class for the empty set of a given dimension.

    Args:
        dim (int, optional): Dimension of the empty set. Defaults to 0.
    """

    def __init__(self, dim=0):
        """Constructor for EmptySet class."""
        if int(dim) != dim or dim < 0:
            raise ValueError(f"Expected dim to be a non-negative integer. Got {dim}")
        self._dim = int(dim)
        self._type_of_set = "EmptySet"

    @property
    def type_of_set(self):
        """Type of the set"""
        return self._type_of_set

    @property
    def dim(self):
        """Dimension of the empty set"""
        return self._dim

    is_empty = True
    is_bounded = True

    def is_universal(self, witness=False):
        """The empty set is not universal. Any point, e.g. the origin, is a witness."""
        if witness:
            return False, np.zeros((self.dim,))
        return False

    def vertices_list(self):
        """The empty set has no vertices"""
        return np.empty((0, self.dim))

    def support_function(self, d):
        """The support function of the empty set is undefined

        Raises:
            ValueError: Always
        """
        raise ValueError("Set must be non-empty for support function evaluation.")

    def support_vector(self, d):
        """The support vector of the empty set is undefined

        Raises:
            ValueError: Always
        """
        raise ValueError("Set must be non-empty for support vector evaluation.")

    def support(self, eta):
        """The support of the empty set is undefined

        Raises:
            ValueError: Always
        """
        raise ValueError("Set must be non-empty for support function evaluation.")

    def contains(self, x):
        """No point is contained in the empty set"""
        raise_error_on_set_membership(x)
        return False

    __contains__ = contains

    def translate(self, v):
        """Translating the empty set yields the empty set"""
        return self

    def linear_map(self, M):
        """The linear map of an empty set is an empty set with as many dimensions as rows in M"""
        M = sanitize_linear_map_matrix(self, M)
        return self.__class__(dim=M.shape[0])

    def copy(self):
        """Create a copy of the empty set"""
        return self.__class__(dim=self.dim)

    def __str__(self):
        return f"EmptySet in R^{self.dim:d}"

    __repr__ = __str__
