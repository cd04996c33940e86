# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test the halfspace-represented and vertex-represented polyhedral sets

import numpy as np
import pytest

from pylazysets import EmptySet, HPolygon, HPolyhedron, HPolytope, Interval, VPolygon, VPolytope
from pylazysets.common import check_matrices_are_equal_ignoring_row_order, is_polyhedral, is_polytopic
from pylazysets.Polyhedron.vertex_halfspace_enumeration import (
    enumerate_halfspaces,
    enumerate_vertices,
    minimal_vertices,
)

A_BOX = [[1, 0], [-1, 0], [0, 1], [0, -1]]
V_BOX = [[1, 1], [1, -1], [-1, 1], [-1, -1]]


def test_hpolytope_init():
    P = HPolytope(A=A_BOX, b=[1, 1, 1, 1])
    assert P.dim == 2
    assert P.n_halfspaces == 4
    assert P.type_of_set == "HPolytope"
    assert is_polytopic(P) and is_polyhedral(P)
    assert P.is_bounded
    assert check_matrices_are_equal_ignoring_row_order(P.vertices_list(), V_BOX)
    P_from_constraints = HPolytope(constraints=P.constraints_list())
    assert np.allclose(P_from_constraints.A, P.A) and np.allclose(P_from_constraints.b, P.b)
    with pytest.raises(ValueError):
        HPolytope(A=A_BOX, b=[1, 1, 1])
    with pytest.raises(ValueError):
        HPolytope(A=A_BOX)
    with pytest.raises(ValueError):
        HPolytope(A=[[np.nan, 0]], b=[1])
    with pytest.warns(UserWarning, match="Removed some rows"):
        P_trivial = HPolyhedron(A=[[1, 0], [0, 0]], b=[1, 1])
    assert P_trivial.n_halfspaces == 1


def test_hpolytope_support_and_membership():
    P = HPolytope(A=A_BOX, b=[1, 1, 1, 1])
    assert np.isclose(P.support_function([1, 1]), 2, atol=1e-6)
    assert np.allclose(P.support_vector([1, 1]), [1, 1], atol=1e-6)
    values, _ = P.support([[1, 0], [0, -2]])
    assert np.allclose(values, [1, 2], atol=1e-6)
    assert [0.5, 0.5] in P
    assert [1 + 1e-12, 0] in P
    assert [1.5, 0] not in P
    assert np.isclose(P.volume(), 4)
    P_translated = P.translate([1, 0])
    assert P_translated.type_of_set == "HPolytope"
    assert [1.9, 0] in P_translated
    assert [-0.5, 0] not in P_translated


def test_hpolyhedron():
    P = HPolyhedron(A=[[1, 0]], b=[1])
    assert not P.is_bounded
    assert not is_polytopic(P)
    assert np.isclose(P.support_function([1, 0]), 1, atol=1e-6)
    assert P.support_function([0, 1]) == np.inf
    assert not P.is_empty
    assert not P.is_universal()
    is_universal, witness = P.is_universal(witness=True)
    assert not is_universal and witness not in P
    assert HPolyhedron(A=A_BOX, b=[1, 1, 1, 1]).is_bounded
    P_empty = HPolyhedron(A=[[1], [-1]], b=[0, -1])
    assert P_empty.is_empty
    with pytest.raises(ValueError):
        P_empty.support_function([1])
    P_universal = HPolyhedron(dim=2)
    assert P_universal.is_universal()
    is_universal, witness = P_universal.is_universal(witness=True)
    assert is_universal and witness.size == 0
    assert [100, -100] in P_universal
    P_mapped = P.linear_map([[2, 0], [0, 1]])
    assert P_mapped.type_of_set == "HPolyhedron"
    assert [1.9, 5] in P_mapped and [2.1, 5] not in P_mapped
    with pytest.raises(ValueError):
        P.linear_map([[1, 1]])


def test_polytope_universality_degenerate_case():
    # A polytope is never universal
    P = HPolytope(A=A_BOX, b=[1, 1, 1, 1])
    assert P.is_universal() is False
    is_universal, witness = P.is_universal(witness=True)
    assert not is_universal and witness not in P
    # Without constraints, the witness is the empty vector
    P_no_constraints = HPolytope(dim=2)
    assert P_no_constraints.is_universal() is False
    is_universal, witness = P_no_constraints.is_universal(witness=True)
    assert is_universal
    assert witness.size == 0


def test_hpolytope_empty():
    P = HPolytope(A=[[1], [-1]], b=[0, -1])
    assert P.is_empty
    assert P.vertices_list().shape[0] == 0
    assert P.volume() == 0
    assert P.linear_map([[2]]).type_of_set == "EmptySet"


def test_hpolytope_linear_map_dispatch_on_output_dimension():
    P = HPolytope(A=A_BOX, b=[1, 1, 1, 1])
    P_1d = P.linear_map([[1, 1]])
    assert isinstance(P_1d, Interval)
    assert np.isclose(P_1d.lo, -2) and np.isclose(P_1d.hi, 2)
    P_2d = P.linear_map(2 * np.eye(2))
    assert P_2d.type_of_set == "HPolygon"
    assert check_matrices_are_equal_ignoring_row_order(P_2d.vertices_list(), 2 * np.array(V_BOX))
    P_3d = P.linear_map(np.ones((3, 2)))
    assert P_3d.type_of_set == "HPolytope"
    assert P_3d.dim == 3
    assert [0, 0, 0] in P_3d
    assert [1, 1, 1] in P_3d
    assert [1, 0, 0] not in P_3d


def test_hpolygon():
    P = HPolygon(A=[[0, -1], [1, 0], [-1, 0], [0, 1]], b=[1, 2, 3, 4])
    assert np.allclose(P.A, [[1, 0], [0, 1], [-1, 0], [0, -1]])
    assert np.allclose(P.b, [2, 4, 3, 1])
    assert P.type_of_set == "HPolygon"
    assert P.translate([1, 1]).type_of_set == "HPolygon"
    with pytest.raises(ValueError):
        HPolygon(A=np.eye(3), b=[1, 1, 1])


def test_remove_redundant_constraints():
    P = HPolytope(A=[*A_BOX, [1, 1]], b=[1, 1, 1, 1, 5])
    P_minimal = P.remove_redundant_constraints()
    assert P_minimal.n_halfspaces == 4
    assert P_minimal.type_of_set == "HPolytope"
    assert check_matrices_are_equal_ignoring_row_order(P_minimal.vertices_list(), V_BOX)


def test_vpolytope():
    P = VPolytope(V=[[0, 0], [1, 0], [0, 1], [0.2, 0.2]])
    assert P.dim == 2 and P.n_vertices == 4
    assert P.support_function([1, 1]) == 1
    assert np.allclose(P.support_vector([1, 0]), [1, 0])
    assert [0.1, 0.1] in P
    assert [1, 1] not in P
    P.minimize_V_rep()
    assert P.n_vertices == 3
    assert check_matrices_are_equal_ignoring_row_order(P.vertices_list(), [[0, 0], [1, 0], [0, 1]])
    assert len(P.constraints_list()) == 3
    A, b = P.tosimplehrep()
    assert A.shape == (3, 2) and b.shape == (3,)
    assert np.isclose(P.volume(), 0.5)
    P_translated = P.translate([1, 1])
    assert np.isclose(P_translated.support_function([-1, 0]), -1)
    assert not P.is_universal()


def test_vpolytope_empty():
    P = VPolytope(dim=2)
    assert P.is_empty
    assert P.linear_map([[1, 1]]).type_of_set == "EmptySet"
    assert isinstance(P.linear_map([[1, 1]]), EmptySet)
    assert [0, 0] not in P
    with pytest.raises(ValueError):
        P.support_function([1, 0])
    with pytest.raises(ValueError):
        VPolytope(V=[[0, 0]], dim=2)


def test_vpolytope_linear_map_dispatch_on_output_dimension():
    P = VPolytope(V=[[0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1]])
    P_1d = P.linear_map([[1, 0, 0]])
    assert P_1d.type_of_set == "Interval"
    assert P_1d.lo == 0 and P_1d.hi == 1
    P_2d = P.linear_map(np.eye(3)[:2, :])
    assert P_2d.type_of_set == "VPolygon"
    assert P_2d.n_vertices == 3
    P_3d = P.linear_map(2 * np.eye(3))
    assert P_3d.type_of_set == "VPolytope"
    assert P_3d.n_vertices == 4
    P_3d_hull = VPolytope(V=[*P.vertices_list(), [0.1, 0.1, 0.1]]).linear_map(np.eye(3), apply_convex_hull=True)
    assert P_3d_hull.n_vertices == 4


def test_vpolygon_is_counter_clockwise():
    P = VPolygon(V=[[1, 1], [0, 0], [1, 0], [0, 1], [0.5, 0.5]])
    V = P.vertices_list()
    assert V.shape == (4, 2)
    twice_signed_area = sum(
        V[i, 0] * V[(i + 1) % 4, 1] - V[(i + 1) % 4, 0] * V[i, 1] for i in range(4)
    )
    assert np.isclose(twice_signed_area, 2)
    assert VPolygon(V=[[0, 0], [1, 1], [2, 2]]).n_vertices == 2
    assert VPolygon(V=[[1, 1], [1, 1]]).n_vertices == 1
    P.minimize_V_rep()
    assert check_matrices_are_equal_ignoring_row_order(P.vertices_list(), V)
    with pytest.raises(ValueError):
        VPolygon(V=[[0, 0, 0]])


def test_vertex_halfspace_enumeration():
    A, b = enumerate_halfspaces(np.array(V_BOX, dtype=float))
    assert A.shape == (4, 2)
    V = enumerate_vertices(A, b)
    assert check_matrices_are_equal_ignoring_row_order(V, V_BOX)
    # A segment in the plane has a pair of opposing inequalities for its affine hull
    A_segment, b_segment = enumerate_halfspaces(np.array([[1, 0], [-1, 0]], dtype=float))
    assert all(A_segment @ np.array([0.5, 0]) <= b_segment + 1e-9)
    assert not all(A_segment @ np.array([0, 0.1]) <= b_segment + 1e-9)
    with pytest.raises(ValueError):
        enumerate_vertices(np.array([[1.0, 0]]), np.array([1.0]))
    assert minimal_vertices(np.array([[0.0], [1.0], [0.5]])).shape == (2, 1)
