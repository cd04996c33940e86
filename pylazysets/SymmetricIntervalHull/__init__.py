# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the SymmetricIntervalHull class, a lazy box enclosure with memoized radii

import numpy as np

from pylazysets.common import (
    _check_bounds,
    _compute_support_function_from_support_vector,
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    is_empty_set,
    is_lazy_set,
)
from pylazysets.common.hyperrectangle_interface import (
    high,
    hyperrectangle_constraints_list,
    hyperrectangle_contains,
    hyperrectangle_genmat,
    hyperrectangle_ngens,
    hyperrectangle_translate,
    hyperrectangle_vertices_list,
    low,
    zonotopic_linear_map,
)
from pylazysets.common.polytope_interface import polytope_is_universal, polytope_volume, tosimplehrep


class SymmetricIntervalHull:
    """SymmetricIntervalHull class for the smallest axis-aligned box that is symmetric about the origin and contains a
    set X.

    Args:
        X (object): Set to enclose. Any object with dim, support_function, and support_vector.

    Raises:
        TypeError: When X is not a set

    Notes:
        - The radius in dimension i is computed with two support vector queries of X (along e_i and -e_i), and cached.
          Each radius is computed at most once over the lifetime of the object.
        - A support vector query along d computes only the radii of the dimensions where d is non-zero.
        - The symmetric interval hull of an EmptySet is the EmptySet itself, i.e., SymmetricIntervalHull(X) returns X.
        - The cache is not protected by a lock. Share an instance across threads only with external synchronization.
    """

    def __new__(cls, X):
        if is_empty_set(X):
            return X
        return super().__new__(cls)

    def __init__(self, X):
        """Constructor for SymmetricIntervalHull class"""
        if not is_lazy_set(X):
            raise TypeError(f"Expected X to be a set. Got {type(X)}")
        self._X = X
        self._radius_cache = [None] * X.dim

    @property
    def type_of_set(self):
        """Type of the set"""
        return "SymmetricIntervalHull"

    @property
    def X(self):
        """Wrapped set"""
        return self._X

    @property
    def dim(self):
        """Dimension of the wrapped set"""
        return self._X.dim

    @property
    def is_empty(self):
        """The symmetric interval hull is empty if and only if the wrapped set is empty"""
        return self._X.is_empty

    is_bounded = True

    def center(self, i=None):
        """Center of the symmetric interval hull, which is always the origin"""
        if i is None:
            return np.zeros((self.dim,))
        _check_bounds(self, i)
        return 0.0

    def an_element(self):
        """Some element of the symmetric interval hull, i.e., the origin"""
        return self.center()

    def is_radius_known(self, i):
        """Check whether the radius in dimension i is cached

        Raises:
            IndexError: When i is out of bounds
        """
        _check_bounds(self, i)
        return self._radius_cache[i] is not None

    def _compute_radius(self, i):
        e_i = np.zeros((self.dim,))
        e_i[i] = 1
        right_bound = self._X.support_vector(e_i)
        left_bound = self._X.support_vector(-e_i)
        self._radius_cache[i] = max(right_bound[i], abs(left_bound[i]))

    def _radius(self, i):
        if self._radius_cache[i] is None:
            self._compute_radius(i)
        return self._radius_cache[i]

    def radius_hyperrectangle(self, i=None):
        """Radius of the symmetric interval hull, or its i-th coordinate

        Args:
            i (int, optional): Dimension of interest (zero-based). Defaults to None, in which case the radius in every
                dimension is computed.

        Raises:
            IndexError: When i is out of bounds

        Returns:
            numpy.ndarray | float: Radius, which is a look-up when it was computed before
        """
        if i is None:
            return np.array([self._radius(j) for j in range(self.dim)])
        _check_bounds(self, i)
        return self._radius(i)

    def _compute_support_vector_single_eta(self, d):
        """Private function to compute the support vector sign(d_i) r_i for each non-zero d_i. Instead, call
        `support_vector`."""
        support_vector = np.zeros((self.dim,))
        for i in range(self.dim):
            if d[i] != 0:
                support_vector[i] = self._radius(i) if d[i] > 0 else -self._radius(i)
        return support_vector

    _compute_support_function_single_eta = _compute_support_function_from_support_vector
    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector

    low = low
    high = high
    vertices_list = hyperrectangle_vertices_list
    constraints_list = hyperrectangle_constraints_list
    tosimplehrep = tosimplehrep
    genmat = hyperrectangle_genmat
    ngens = hyperrectangle_ngens
    is_universal = polytope_is_universal
    volume = polytope_volume

    contains = hyperrectangle_contains
    __contains__ = hyperrectangle_contains

    translate = hyperrectangle_translate
    linear_map = zonotopic_linear_map

    def __str__(self):
        return f"SymmetricIntervalHull in R^{self.dim:d}"

    def __repr__(self):
        known = sum(radius is not None for radius in self._radius_cache)
        return f"SymmetricIntervalHull in R^{self.dim:d} of {str(self._X):s} ({known:d} of {self.dim:d} radii known)"
