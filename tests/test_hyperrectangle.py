# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test the Hyperrectangle and Interval classes

import numpy as np
import pytest

from pylazysets import Hyperrectangle, Interval
from pylazysets.common import check_matrices_are_equal_ignoring_row_order, is_hyperrectangular, is_zonotopic


def test_hyperrectangle_init():
    H = Hyperrectangle(center=[1, 2], radius=[1, 0.5])
    assert H.dim == 2
    assert np.allclose(H.center(), [1, 2])
    assert H.center(1) == 2
    assert np.allclose(H.radius_hyperrectangle(), [1, 0.5])
    assert np.allclose(H.low(), [0, 1.5])
    assert np.allclose(H.high(), [2, 2.5])
    assert H.low(1) == 1.5
    assert H.high(0) == 2
    with pytest.raises(IndexError):
        H.center(2)
    with pytest.raises(IndexError):
        H.low(2)
    H_bounds = Hyperrectangle(lb=[0, 1.5], ub=[2, 2.5])
    assert np.allclose(H_bounds.center(), [1, 2])
    assert np.allclose(H_bounds.radius_hyperrectangle(), [1, 0.5])
    assert is_hyperrectangular(H) and is_zonotopic(H)
    with pytest.raises(ValueError):
        Hyperrectangle(center=[0, 0], radius=[-1, 1])
    with pytest.raises(ValueError):
        Hyperrectangle(lb=[1, 0], ub=[0, 0])
    with pytest.raises(ValueError):
        Hyperrectangle(center=[0, 0], radius=[1, 1, 1])
    with pytest.raises(ValueError):
        Hyperrectangle(center=[0, 0])
    with pytest.raises(ValueError):
        Hyperrectangle(c=[0, 0], r=[1, 1])


def test_hyperrectangle_support():
    H = Hyperrectangle(center=[1, 2], radius=[1, 0.5])
    assert np.isclose(H.support_function([1, -1]), 0.5)
    assert np.allclose(H.support_vector([1, -1]), [2, 1.5])
    assert np.allclose(H.support_vector([0, 1]), [1, 2.5])
    for d in [[1, 1], [-1, 0.5], [0.3, -2]]:
        assert np.isclose(H.support_function(d), np.dot(d, H.support_vector(d)))


def test_hyperrectangle_vertices_and_constraints():
    H = Hyperrectangle(center=[1, 2], radius=[1, 0.5])
    assert check_matrices_are_equal_ignoring_row_order(H.vertices_list(), [[0, 1.5], [0, 2.5], [2, 1.5], [2, 2.5]])
    constraints = H.constraints_list()
    assert len(constraints) == 4
    assert np.allclose([c.a for c in constraints], [[1, 0], [-1, 0], [0, 1], [0, -1]])
    assert np.allclose([c.b for c in constraints], [2, 0, 2.5, -1.5])
    H_flat = Hyperrectangle(center=[0, 0], radius=[1, 0])
    assert H_flat.vertices_list().shape == (2, 2)
    assert H_flat.genmat().shape == (2, 1)
    assert H_flat.ngens() == 1
    assert np.isclose(H.volume(), 2)
    assert H_flat.volume() == 0


def test_hyperrectangle_membership_and_maps():
    H = Hyperrectangle(center=[1, 2], radius=[1, 0.5])
    assert [0, 1.5] in H
    assert [2 + 1e-12, 2] in H
    assert [2.1, 2] not in H
    with pytest.raises(ValueError):
        H.contains([1, 2, 3])
    H_translated = H.translate([1, 1])
    assert H_translated.type_of_set == "Hyperrectangle"
    assert np.allclose(H_translated.center(), [2, 3])
    assert np.allclose(H_translated.radius_hyperrectangle(), [1, 0.5])
    Z = H.linear_map([[1, 1]])
    assert Z.type_of_set == "Zonotope"
    assert np.allclose(Z.center(), [3])
    assert np.allclose(Z.genmat(), [[1, 0.5]])
    with pytest.raises(ValueError):
        H.linear_map([[1, 1, 1]])
    assert not H.is_universal()


def test_interval():
    X = Interval(1, 3)
    assert X.dim == 1
    assert X.lo == 1 and X.hi == 3
    assert [2] in X
    assert [3.5] not in X
    assert X.support_function([-1]) == -1
    assert X.support_function([2]) == 6
    assert X.type_of_set == "Interval"
    with pytest.raises(ValueError):
        Interval(3, 1)
    X_flipped = X.linear_map([[-1]])
    assert X_flipped.type_of_set == "Interval"
    assert X_flipped.lo == -3 and X_flipped.hi == -1
    X_planar = X.linear_map([[2], [1]])
    assert X_planar.type_of_set == "VPolygon"
    assert check_matrices_are_equal_ignoring_row_order(X_planar.vertices_list(), [[2, 1], [6, 3]])
    assert np.isclose(X.volume(), 2)
