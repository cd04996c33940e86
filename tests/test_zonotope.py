# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test the Zonotope and Ellipsoid classes

import numpy as np
import pytest

from pylazysets import Ellipsoid, Zonotope
from pylazysets.common import check_matrices_are_equal_ignoring_row_order, is_polyhedral, is_zonotopic


def test_zonotope_init():
    Z = Zonotope(center=[1, 0], generators=np.eye(2))
    assert Z.dim == 2
    assert Z.ngens() == 2
    assert np.allclose(Z.center(), [1, 0])
    assert Z.center(0) == 1
    with pytest.raises(IndexError):
        Z.center(2)
    assert is_zonotopic(Z) and is_polyhedral(Z)
    Z_point = Zonotope(center=[1, 2])
    assert Z_point.ngens() == 0
    assert np.allclose(Z_point.vertices_list(), [[1, 2]])
    with pytest.raises(ValueError):
        Zonotope(center=[0, 0], generators=np.ones((3, 2)))
    with pytest.raises(ValueError):
        Zonotope(center=[0, np.nan])
    Z_with_zeros = Zonotope(center=[0, 0], generators=[[1, 0, 0], [0, 0, 1]])
    assert Z_with_zeros.remove_zero_generators().ngens() == 2


def test_zonotope_support():
    Z = Zonotope(center=[1, 0], generators=np.eye(2))
    assert Z.support_function([1, 1]) == 3
    assert np.allclose(Z.support_vector([1, 1]), [2, 1])
    assert np.allclose(Z.support_vector([1, 0]), [2, 0])
    Z_skewed = Zonotope(center=[0, 0], generators=[[1, 1], [0, 1]])
    for d in [[1, 0], [1, -1], [-0.3, 2]]:
        assert np.isclose(Z_skewed.support_function(d), np.dot(d, Z_skewed.support_vector(d)))


def test_zonotope_vertices_and_constraints():
    Z = Zonotope(center=[1, 0], generators=np.eye(2))
    assert check_matrices_are_equal_ignoring_row_order(Z.vertices_list(), [[0, -1], [2, -1], [0, 1], [2, 1]])
    Z_skewed = Zonotope(center=[0, 0], generators=[[1, 1], [0, 1]])
    assert check_matrices_are_equal_ignoring_row_order(
        Z_skewed.vertices_list(), [[2, 1], [0, -1], [0, 1], [-2, -1]]
    )
    assert len(Z_skewed.constraints_list()) == 4
    A, b = Z_skewed.tosimplehrep()
    assert np.all(A @ np.array([0, 0]) <= b)
    assert np.isclose(Z.volume(), 4)
    Z_redundant = Zonotope(center=[0, 0], generators=[[1, 0, 1], [0, 1, 1]])
    assert Z_redundant.vertices_list().shape == (6, 2)


def test_zonotope_membership_and_maps():
    Z = Zonotope(center=[1, 0], generators=np.eye(2))
    assert [0, 0] in Z
    assert [2, 1] in Z
    assert [3, 0] not in Z
    with pytest.raises(ValueError):
        Z.contains([0, 0, 0])
    Z_mapped = Z.linear_map([[1, 1]])
    assert Z_mapped.type_of_set == "Zonotope"
    assert np.allclose(Z_mapped.center(), [1])
    assert np.allclose(Z_mapped.genmat(), [[1, 1]])
    Z_translated = Z.translate([-1, 1])
    assert np.allclose(Z_translated.center(), [0, 1])
    assert np.allclose(Z_translated.genmat(), np.eye(2))


def test_ellipsoid():
    E_ball = Ellipsoid(c=[0, 0], r=2)
    assert E_ball.dim == 2
    assert np.isclose(E_ball.support_function([1, 0]), 2)
    assert np.allclose(E_ball.support_vector([0, 1]), [0, 2])
    E = Ellipsoid(c=[1, 0], Q=np.diag([4, 1]))
    assert np.isclose(E.support_function([1, 0]), 3)
    assert np.allclose(E.support_vector([0, -1]), [1, -1])
    assert [1, 0] in E
    assert [2.9, 0] in E
    assert [4, 0] not in E
    assert not is_polyhedral(E)
    assert E.is_bounded and not E.is_empty
    lb, ub = E_ball.minimum_volume_circumscribing_rectangle()
    assert np.allclose(lb, [-2, -2]) and np.allclose(ub, [2, 2])
    E_degenerate = Ellipsoid(c=[0, 0], G=[[1], [0]])
    assert np.isclose(E_degenerate.support_function([0, 1]), 0)
    assert np.allclose(E_degenerate.Q, [[1, 0], [0, 0]])
    E_mapped = E_ball.linear_map([[1, 0]])
    assert np.isclose(E_mapped.support_function([1]), 2)
    assert np.allclose(E.translate([1, 1]).c, [2, 1])
    with pytest.raises(ValueError):
        Ellipsoid(c=[0, 0], Q=[[1, 0], [0, -1]])
    with pytest.raises(ValueError):
        Ellipsoid(c=[0, 0], Q=np.eye(2), r=1)
    with pytest.raises(ValueError):
        Ellipsoid(Q=np.eye(2))
    with pytest.raises(ValueError):
        Ellipsoid(c=[0, 0], r=-1)
