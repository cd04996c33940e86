# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the HalfSpace class

import numpy as np

from pylazysets.common import (
    convex_set_support,
    convex_set_support_function,
    convex_set_support_vector,
    raise_error_on_set_membership,
    sanitize_vector,
)
from pylazysets.common.comparisons import _leq
from pylazysets.common.polytope_interface import tosimplehrep


class HalfSpace:
    r"""HalfSpace class for the set :math:`\{x\ |\ a^\top x \leq b\}`.

    Args:
        a (array_like): Normal vector
        b (float): Offset

    Raises:
        ValueError: When a is not convertible into a 1D array or b is not a scalar
    """

    def __init__(self, a, b):
        """Constructor for HalfSpace class."""
        self._a = sanitize_vector(a, name="a")
        b = np.squeeze(np.asarray(b))
        if b.ndim != 0:
            raise ValueError(f"Expected b to be a scalar. Got {np.array2string(np.array(b)):s}")
        self._b = b.item()
        self._type_of_set = "HalfSpace"

    @property
    def type_of_set(self):
        """Type of the set"""
        return self._type_of_set

    @property
    def dim(self):
        """Dimension of the halfspace"""
        return self._a.size

    @property
    def a(self):
        """Normal vector of the halfspace"""
        return self._a

    @property
    def b(self):
        """Offset of the halfspace"""
        return self._b

    @property
    def is_empty(self):
        """A halfspace is never empty"""
        return False

    @property
    def is_bounded(self):
        """A halfspace is unbounded unless it is zero-dimensional"""
        return self.dim == 0

    def is_universal(self, witness=False):
        r"""Check whether the halfspace is universal.

        Args:
            witness (bool, optional): When True, compute a witness. Defaults to False.

        Returns:
            bool | tuple: When witness is False, True if and only if the normal vector is zero. Otherwise, a tuple
            (False, v) with :math:`v = a (b + 1) / \|a\|^2` that satisfies :math:`a^\top v = b + 1 > b`, or (True, empty
            vector) for a zero normal vector.
        """
        is_universal = not np.any(self._a != 0)
        if not witness:
            return is_universal
        elif is_universal:
            return True, np.empty((0,))
        else:
            return False, self._a * (self._b + 1) / (self._a @ self._a)

    def constraints_list(self):
        """List of constraints, which is the halfspace itself"""
        return [self]

    tosimplehrep = tosimplehrep

    def _compute_support_vector_single_eta(self, d):
        """Private function. A halfspace has a finite support only along its (positively scaled) normal vector."""
        scaling = self._scaling_along_normal(d)
        if scaling is None:
            return np.inf * np.ones((self.dim,))
        elif self.is_universal():
            return np.zeros((self.dim,))
        return self._a * self._b / (self._a @ self._a)

    def _compute_support_function_single_eta(self, d):
        """Private function. See :meth:`_compute_support_vector_single_eta`."""
        scaling = self._scaling_along_normal(d)
        if scaling is None:
            return np.inf
        return scaling * self._b

    def _scaling_along_normal(self, d):
        """Return the scaling lambda >= 0 such that d = lambda a, or None when no such lambda exists"""
        if not np.any(d != 0):
            return 0
        elif self.is_universal():
            return None
        index = int(np.argmax(np.abs(self._a)))
        scaling = d[index] / self._a[index]
        if scaling >= 0 and np.allclose(d, scaling * self._a):
            return scaling
        return None

    support = convex_set_support
    support_function = convex_set_support_function
    support_vector = convex_set_support_vector

    def contains(self, x):
        r"""Check whether :math:`a^\top x \leq b` (approximately)."""
        raise_error_on_set_membership(x)
        x = sanitize_vector(x)
        if x.size != self.dim:
            raise ValueError(f"Mismatch in dimensions (self.dim: {self.dim:d} and x.dim: {x.size:d})")
        return _leq(self._a @ x, self._b)

    __contains__ = contains

    def translate(self, v):
        """Translate the halfspace by v"""
        v = sanitize_vector(v, name="v")
        return self.__class__(a=self._a, b=self._b + self._a @ v)

    def __str__(self):
        return f"HalfSpace in R^{self.dim:d}"

    def __repr__(self):
        return f"HalfSpace in R^{self.dim:d} with a: {np.array2string(self._a):s} and b: {self._b}"
