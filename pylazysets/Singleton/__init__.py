# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the Singleton and ZeroSet classes

import numpy as np

from pylazysets.common import (
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    sanitize_vector,
)
from pylazysets.common.hyperrectangle_interface import (
    high,
    hyperrectangle_constraints_list,
    low,
)
from pylazysets.common.polytope_interface import polytope_is_universal, sanitize_linear_map_matrix, tosimplehrep
from pylazysets.common.singleton_interface import (
    chebyshev_center_radius,
    element,
    singleton_center,
    singleton_contains,
    singleton_genmat,
    singleton_ngens,
    singleton_radius_hyperrectangle,
    singleton_support_function,
    singleton_support_vector,
    singleton_vertices_list,
)


class Singleton:
    r"""Singleton class for a set :math:`\{x\}` with a single element.

    Args:
        element (array_like): The element of the set. Arrays of fractions.Fraction are kept exact.

    Raises:
        ValueError: When element is not convertible into a 1D array
    """

    def __init__(self, element):
        """Constructor for Singleton class."""
        self._element = sanitize_vector(element, name="element")
        self._type_of_set = "Singleton"

    @property
    def type_of_set(self):
        """Type of the set"""
        return self._type_of_set

    @property
    def dim(self):
        """Dimension of the singleton"""
        return self._element.size

    is_empty = False
    is_bounded = True

    ################
    # Singleton-like
    ################
    element = element
    center = singleton_center
    radius_hyperrectangle = singleton_radius_hyperrectangle
    vertices_list = singleton_vertices_list
    genmat = singleton_genmat
    ngens = singleton_ngens
    chebyshev_center_radius = chebyshev_center_radius
    low = low
    high = high
    constraints_list = hyperrectangle_constraints_list
    tosimplehrep = tosimplehrep
    is_universal = polytope_is_universal

    _compute_support_vector_single_eta = singleton_support_vector
    _compute_support_function_single_eta = singleton_support_function
    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector

    contains = singleton_contains
    __contains__ = singleton_contains

    def translate(self, v):
        """Translate the singleton by v"""
        v = sanitize_vector(v, name="v")
        if v.size != self.dim:
            raise ValueError(f"Expected a translation vector of length {self.dim:d}. Got {v.size:d}")
        return Singleton(self._element + v)

    def linear_map(self, M):
        """Apply the linear map M to the singleton"""
        M = sanitize_linear_map_matrix(self, M)
        return Singleton(M @ self._element)

    def copy(self):
        """Create a copy of the singleton"""
        return self.__class__(self._element.copy())

    def __str__(self):
        return f"{self.type_of_set:s} in R^{self.dim:d}"

    def __repr__(self):
        return f"{self.type_of_set:s} in R^{self.dim:d} at {np.array2string(np.array(self._element)):s}"


class ZeroSet(Singleton):
    """ZeroSet class for the set containing only the origin. It is the neutral element of the Minkowski sum and the
    Minkowski difference.

    Args:
        dim (int): Dimension of the set
    """

    def __init__(self, dim):
        """Constructor for ZeroSet class."""
        if int(dim) != dim or dim < 0:
            raise ValueError(f"Expected dim to be a non-negative integer. Got {dim}")
        super().__init__(np.zeros((int(dim),)))
        self._type_of_set = "ZeroSet"

    def translate(self, v):
        """Translate the origin by v"""
        return Singleton(v)

    def linear_map(self, M):
        """The linear map of the origin is the origin"""
        M = sanitize_linear_map_matrix(self, M)
        return ZeroSet(M.shape[0])

    def copy(self):
        """Create a copy of the zero set"""
        return self.__class__(self.dim)
