# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

from setuptools import setup

with open("README.md", "r") as fh:
    long_description = fh.read()

# numpy>=1.14 for rcond=None correct defaults from https://stackoverflow.com/a/44678023
# pycddlib>=3.0.0 for the matrix_from_array/polyhedron_from_matrix interface
# cvxpy>=1.5.3 for the CLARABEL default solver
INSTALL_REQUIRES = [
    "numpy>=1.14",
    "scipy>=1.3.0",
    "pycddlib>=3.0.0",
    "cvxpy>=1.5.3",
]
TESTS_REQUIRES = ["pytest", "coverage"]

setup(
    name="pylazysets",
    version="0.1.0",
    description="A Python package for lazy set representations and set-based computations.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="AGPL-3.0-or-later",
    packages=[
        "pylazysets",
        "pylazysets.common",
        "pylazysets.Ellipsoid",
        "pylazysets.EmptySet",
        "pylazysets.HalfSpace",
        "pylazysets.Hyperrectangle",
        "pylazysets.LazyOperations",
        "pylazysets.Polyhedron",
        "pylazysets.Singleton",
        "pylazysets.SymmetricIntervalHull",
        "pylazysets.VPolytope",
        "pylazysets.Zonotope",
    ],
    install_requires=INSTALL_REQUIRES,
    extras_require={
        "with_tests": TESTS_REQUIRES,
    },
    python_requires=">=3.9",
    zip_safe=False,
)
