# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the Hyperrectangle and Interval classes

import numpy as np

from pylazysets.common import (
    _check_bounds,
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    sanitize_vector,
)
from pylazysets.common.hyperrectangle_interface import (
    high,
    hyperrectangle_constraints_list,
    hyperrectangle_contains,
    hyperrectangle_genmat,
    hyperrectangle_ngens,
    hyperrectangle_support_function,
    hyperrectangle_support_vector,
    hyperrectangle_translate,
    hyperrectangle_vertices_list,
    low,
    zonotopic_linear_map,
)
from pylazysets.common.polytope_interface import (
    _linear_map_vrep,
    polytope_is_universal,
    polytope_volume,
    tosimplehrep,
)


class Hyperrectangle:
    r"""Hyperrectangle class for an axis-aligned box :math:`\{x\ |\ |x_i - c_i| \leq r_i\}`.

    We can define a Hyperrectangle object in the following formats:

    * **Center and radius**: Specify (center, radius) with a non-negative radius.
    * **Bounds**: Specify (lb, ub) with lb <= ub elementwise.

    Args:
        center (array_like, optional): Center of the box
        radius (array_like, optional): Radius of the box in each dimension
        lb (array_like, optional): Lower bound of the box
        ub (array_like, optional): Upper bound of the box

    Raises:
        ValueError: When arguments provided is not one of [(center, radius), (lb, ub)]
        ValueError: When radius has a negative entry or lb > ub in some dimension
        ValueError: Mismatch in dimensions
    """

    def __init__(self, **kwargs):
        """Constructor for Hyperrectangle class"""
        if len(kwargs) != 2:
            raise ValueError("Expected exactly two keyword arguments: (center, radius) or (lb, ub)")
        if "center" in kwargs and "radius" in kwargs:
            center = sanitize_vector(kwargs["center"], name="center")
            radius = sanitize_vector(kwargs["radius"], name="radius")
        elif "lb" in kwargs and "ub" in kwargs:
            lb = sanitize_vector(kwargs["lb"], name="lb")
            ub = sanitize_vector(kwargs["ub"], name="ub")
            if lb.size != ub.size:
                raise ValueError(f"Mismatch in dimensions of lb ({lb.size:d}) and ub ({ub.size:d})")
            center = (lb + ub) / 2
            radius = (ub - lb) / 2
        else:
            raise ValueError(f"Invalid keyword arguments {list(kwargs.keys())}. Use (center, radius) or (lb, ub)")
        if center.size != radius.size:
            raise ValueError(f"Mismatch in dimensions of center ({center.size:d}) and radius ({radius.size:d})")
        elif any(r < 0 for r in radius):
            raise ValueError(f"Expected a non-negative radius. Got {np.array2string(np.array(radius)):s}")
        self._center = center
        self._radius = radius
        self._type_of_set = "Hyperrectangle"

    @property
    def type_of_set(self):
        """Type of the set"""
        return self._type_of_set

    @property
    def dim(self):
        """Dimension of the hyperrectangle"""
        return self._center.size

    is_empty = False
    is_bounded = True

    def center(self, i=None):
        """Center of the hyperrectangle, or its i-th coordinate

        Raises:
            IndexError: When i is out of bounds
        """
        if i is None:
            return self._center.copy()
        _check_bounds(self, i)
        return self._center[i]

    def radius_hyperrectangle(self, i=None):
        """Radius of the hyperrectangle, or its i-th coordinate

        Raises:
            IndexError: When i is out of bounds
        """
        if i is None:
            return self._radius.copy()
        _check_bounds(self, i)
        return self._radius[i]

    low = low
    high = high
    vertices_list = hyperrectangle_vertices_list
    constraints_list = hyperrectangle_constraints_list
    tosimplehrep = tosimplehrep
    genmat = hyperrectangle_genmat
    ngens = hyperrectangle_ngens
    is_universal = polytope_is_universal
    volume = polytope_volume

    _compute_support_vector_single_eta = hyperrectangle_support_vector
    _compute_support_function_single_eta = hyperrectangle_support_function
    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector

    contains = hyperrectangle_contains
    __contains__ = hyperrectangle_contains

    translate = hyperrectangle_translate
    linear_map = zonotopic_linear_map

    def copy(self):
        """Create a copy of the hyperrectangle"""
        return Hyperrectangle(center=self._center.copy(), radius=self._radius.copy())

    def __str__(self):
        return f"{self.type_of_set:s} in R^{self.dim:d}"

    def __repr__(self):
        return (
            f"{self.type_of_set:s} in R^{self.dim:d} with center: {np.array2string(np.array(self._center)):s} and "
            f"radius: {np.array2string(np.array(self._radius)):s}"
        )


class Interval(Hyperrectangle):
    """Interval class for the one-dimensional set [lo, hi]

    Args:
        lo (float): Lower end
        hi (float): Higher end

    Raises:
        ValueError: When lo > hi
    """

    def __init__(self, lo, hi):
        """Constructor for Interval class"""
        if lo > hi:
            raise ValueError(f"Expected lo <= hi. Got lo: {lo} and hi: {hi}")
        super().__init__(lb=[lo], ub=[hi])
        self._type_of_set = "Interval"

    @property
    def lo(self):
        """Lower end of the interval"""
        return self.low(0)

    @property
    def hi(self):
        """Higher end of the interval"""
        return self.high(0)

    def linear_map(self, M):
        """Apply the linear map M (with one column) to the interval

        Returns:
            Interval | VPolygon | VPolytope: See :meth:`pylazysets.common.polytope_interface._linear_map_vrep`
        """
        return _linear_map_vrep(self, M)

    def copy(self):
        """Create a copy of the interval"""
        return Interval(self.lo, self.hi)

    def __repr__(self):
        return f"Interval [{self.lo}, {self.hi}]"
