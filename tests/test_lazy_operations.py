# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test the lazy operations MinkowskiSum, LinearMap, and ResetMap

import numpy as np
import pytest

from pylazysets import EmptySet, HPolyhedron, Hyperrectangle, LinearMap, MinkowskiSum, ResetMap, Singleton


def get_box(center=(0, 0), radius=(1, 1)):
    return Hyperrectangle(center=center, radius=radius)


def test_minkowski_sum():
    X = MinkowskiSum(get_box(), Singleton([1, 2]))
    assert X.dim == 2
    assert X.support_function([1, 0]) == 2
    assert np.allclose(X.support_vector([1, 1]), [2, 3])
    values, vectors = X.support([[1, 0], [0, -1]])
    assert np.allclose(values, [2, -1])
    assert np.allclose(vectors[1], [1, 1])
    assert not X.is_empty and X.is_bounded
    assert MinkowskiSum(get_box(), EmptySet(2)).is_empty
    assert not MinkowskiSum(get_box(), HPolyhedron(A=[[1, 0]], b=[1])).is_bounded
    with pytest.raises(ValueError):
        MinkowskiSum(get_box(), Singleton([1, 2, 3]))
    with pytest.raises(TypeError):
        MinkowskiSum(get_box(), [1, 2])
    X_translated = X.translate([1, 0])
    assert X_translated.type_of_set == "MinkowskiSum"
    assert X_translated.support_function([1, 0]) == 3


def test_linear_map():
    X = LinearMap([[2, 0], [0, 1]], get_box())
    assert X.dim == 2
    assert X.support_function([1, 0]) == 2
    assert np.allclose(X.support_vector([1, 1]), [2, 1])
    X_projected = LinearMap([[1, 1]], get_box())
    assert X_projected.dim == 1
    assert X_projected.support_function([1]) == 2
    assert np.allclose(X_projected.support_vector([-1]), [-2])
    assert X.is_bounded
    assert not LinearMap(np.eye(2), HPolyhedron(A=[[1, 0]], b=[1])).is_bounded
    with pytest.raises(NotImplementedError):
        LinearMap([[1, 0]], HPolyhedron(A=[[1, 0]], b=[1])).is_bounded
    with pytest.raises(ValueError):
        LinearMap([[1, 0, 0]], get_box())
    with pytest.raises(ValueError, match="cannot compute the support"):
        X_projected.support_function([1, 0])


def test_reset_map():
    X = ResetMap(get_box(center=[1, 2]), {0: 5})
    assert X.dim == 2
    assert np.allclose(X.support_vector([1, 1]), [5, 3])
    assert X.support_function([1, 1]) == 8
    assert np.allclose(X.support_vector([-1, -1]), [5, 1])
    assert X.support_function([-1, -1]) == -6
    assert np.allclose(X.get_A(), [[0, 0], [0, 1]])
    assert np.allclose(X.get_b(), [5, 0])
    assert X.resets == {0: 5}
    assert X.is_bounded and not X.is_empty
    with pytest.raises(IndexError):
        ResetMap(get_box(), {2: 1})
    # Resetting the unbounded coordinate yields a bounded set
    X_unbounded = ResetMap(HPolyhedron(A=[[1, 0], [-1, 0], [0, 1]], b=[1, 1, 1]), {1: 0})
    assert X_unbounded.is_bounded
    assert X_unbounded.translate([0, 1]).support_function([0, 1]) == 1
