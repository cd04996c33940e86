# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  __init__ script for pylazysets package

from .common import (
    is_empty_set,
    is_hyperrectangular,
    is_lazy_set,
    is_polyhedral,
    is_polytopic,
    is_singleton,
    is_zero_set,
    is_zonotopic,
)
from .common.operations_binary import (
    cross_product,
    is_subset,
    isequivalent,
    minkowski_difference,
    minkowski_difference_zonotopes,
    pontryagin_difference,
    strictly_increasing_indices,
)
from .Ellipsoid import Ellipsoid
from .EmptySet import EmptySet
from .HalfSpace import HalfSpace
from .Hyperrectangle import Hyperrectangle, Interval
from .LazyOperations import LinearMap, MinkowskiSum, ResetMap
from .Polyhedron import HPolygon, HPolyhedron, HPolytope
from .Singleton import Singleton, ZeroSet
from .SymmetricIntervalHull import SymmetricIntervalHull
from .VPolytope import VPolygon, VPolytope
from .Zonotope import Zonotope
