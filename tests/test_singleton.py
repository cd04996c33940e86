# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test the Singleton, ZeroSet, EmptySet, and HalfSpace classes

from fractions import Fraction

import numpy as np
import pytest

from pylazysets import EmptySet, HalfSpace, Hyperrectangle, Singleton, ZeroSet
from pylazysets.common import (
    is_empty_set,
    is_hyperrectangular,
    is_lazy_set,
    is_polyhedral,
    is_polytopic,
    is_singleton,
    is_zero_set,
    is_zonotopic,
)


def test_singleton_element_access():
    S = Singleton([2, 3])
    assert S.dim == 2
    assert S.element(0) == 2
    assert S.element(1) == 3
    with pytest.raises(IndexError):
        S.element(2)
    with pytest.raises(IndexError):
        S.element(-1)
    assert np.allclose(S.element(), [2, 3])
    assert np.allclose(S.center(), [2, 3])
    assert np.allclose(S.radius_hyperrectangle(), [0, 0])
    assert S.radius_hyperrectangle(1) == 0
    with pytest.raises(IndexError):
        S.radius_hyperrectangle(2)
    with pytest.raises(ValueError):
        Singleton([[1, 2], [3, 4]])
    with pytest.raises(ValueError):
        Singleton([1, np.nan])


def test_singleton_capabilities():
    S = Singleton([2, 3])
    assert is_lazy_set(S)
    assert is_singleton(S)
    assert is_hyperrectangular(S)
    assert is_polytopic(S)
    assert is_polyhedral(S)
    assert is_zonotopic(S)
    assert not is_zero_set(S)
    assert not is_empty_set(S)
    assert not is_lazy_set([2, 3])
    assert not S.is_empty
    assert S.is_bounded
    assert S.genmat().shape == (2, 0)
    assert S.ngens() == 0
    assert np.allclose(S.vertices_list(), [[2, 3]])
    assert np.allclose(S.low(), [2, 3]) and np.allclose(S.high(), [2, 3])
    center, radius = S.chebyshev_center_radius()
    assert np.allclose(center, [2, 3]) and radius == 0


def test_singleton_support_and_membership():
    S = Singleton([2, 3])
    assert np.allclose(S.support_vector([1, -1]), [2, 3])
    assert S.support_function([1, 1]) == 5
    values, vectors = S.support([[1, 0], [0, -1]])
    assert np.allclose(values, [2, -3])
    assert np.allclose(vectors, [[2, 3], [2, 3]])
    with pytest.raises(ValueError, match="cannot compute the support of a 2-dimensional set along a vector of length 3"):
        S.support_function([1, 0, 0])
    assert [2, 3] in S
    assert [2, 3 + 1e-12] in S
    assert [2, 4] not in S
    assert S.contains(np.array([2.0, 3.0]))


def test_set_in_set_is_a_usage_error():
    S = Singleton([0.5, 0.5])
    H = Hyperrectangle(center=[0, 0], radius=[1, 1])
    with pytest.raises(ValueError, match="cannot make a point-in-set check.*S.element\\(\\) in X"):
        S in H
    with pytest.raises(ValueError, match="is_subset"):
        H in S
    with pytest.raises(ValueError, match="cannot make a point-in-set check"):
        H in EmptySet(2)
    assert S.element() in H


def test_singleton_exact_arithmetic():
    S = Singleton([Fraction(1, 3), Fraction(2, 3)])
    assert S.element(0) == Fraction(1, 3)
    assert [Fraction(1, 3), Fraction(2, 3)] in S
    assert [Fraction(1, 3) + Fraction(1, 10**30), Fraction(2, 3)] not in S
    assert S.support_function(np.array([Fraction(3, 1), Fraction(0, 1)], dtype=object)) == 1


def test_singleton_operations():
    S = Singleton([2, 3])
    T = S.translate([1, 1])
    assert T.type_of_set == "Singleton"
    assert np.allclose(T.element(), [3, 4])
    with pytest.raises(ValueError):
        S.translate([1, 1, 1])
    M = S.linear_map([[1, 1]])
    assert M.dim == 1 and M.element(0) == 5
    assert S.is_universal() is False
    is_universal, witness = S.is_universal(witness=True)
    assert not is_universal
    assert witness not in S
    assert np.allclose(witness, [3, 0])
    A, b = S.tosimplehrep()
    assert A.shape == (4, 2) and np.allclose(b, [2, -2, 3, -3])


def test_zero_set():
    Z = ZeroSet(2)
    assert Z.type_of_set == "ZeroSet"
    assert is_zero_set(Z) and is_singleton(Z)
    assert np.allclose(Z.element(), [0, 0])
    assert [0, 0] in Z
    T = Z.translate([1, 2])
    assert T.type_of_set == "Singleton"
    assert np.allclose(T.element(), [1, 2])
    assert Z.linear_map(np.ones((3, 2))).type_of_set == "ZeroSet"
    assert Z.linear_map(np.ones((3, 2))).dim == 3
    with pytest.raises(ValueError):
        ZeroSet(-1)


def test_empty_set():
    E = EmptySet(2)
    assert E.dim == 2
    assert E.is_empty and E.is_bounded
    assert is_empty_set(E)
    assert [0, 0] not in E
    assert E.vertices_list().shape == (0, 2)
    with pytest.raises(ValueError):
        E.support_function([1, 0])
    with pytest.raises(ValueError):
        E.support_vector([1, 0])
    with pytest.raises(ValueError):
        E.support([[1, 0]])
    assert E.translate([1, 1]) is E
    assert E.linear_map(np.ones((3, 2))).dim == 3
    assert E.is_universal() is False
    assert EmptySet().dim == 0


def test_halfspace():
    H = HalfSpace([1, 0], 1)
    assert H.dim == 2
    assert [0.5, 100] in H
    assert [1 + 1e-12, 0] in H
    assert [2, 0] not in H
    assert H.support_function([2, 0]) == 2
    assert np.allclose(H.support_vector([1, 0]), [1, 0])
    assert H.support_function([0, 1]) == np.inf
    assert H.support_function([-1, 0]) == np.inf
    assert H.support_function([0, 0]) == 0
    assert not H.is_bounded and not H.is_empty
    assert not H.is_universal()
    is_universal, witness = H.is_universal(witness=True)
    assert not is_universal
    assert np.allclose(witness, [2, 0])
    assert witness not in H
    assert HalfSpace([0, 0], 1).is_universal()
    assert HalfSpace([0, 0], 1).support_function([1, 0]) == np.inf
    assert np.allclose(HalfSpace([0, 0], 1).support_vector([0, 0]), [0, 0])
    A, b = H.tosimplehrep()
    assert np.allclose(A, [[1, 0]]) and np.allclose(b, [1])
    H_translated = H.translate([1, 5])
    assert H_translated.b == 2
    assert H.constraints_list()[0] is H
    with pytest.raises(ValueError):
        HalfSpace([1, 0], [1, 2])
