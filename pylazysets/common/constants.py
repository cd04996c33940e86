# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Specify the constants to be used for tolerances, cvxpy solvers, and testing workflows

import numpy as np

PYLAZYSETS_ZERO = 1e-6  # Zero threshold for numerical stability

# Default tolerances for approximate comparisons (see pylazysets.common.comparisons)
ABSZTOL_FLOAT = float(np.sqrt(np.finfo(float).eps))  # Absolute zero tolerance for floating-point numbers
ABSZTOL_EXACT = 0  # Absolute zero tolerance for exact numbers (int, fractions.Fraction)
RTOL_FLOAT = float(np.sqrt(np.finfo(float).eps))  # Relative tolerance for floating-point numbers
RTOL_EXACT = 0  # Relative tolerance for exact numbers

# Solvers used by default
DEFAULT_LP_SOLVER_STR = "CLARABEL"  # CLARABEL, MOSEK, CVXOPT, SCS, ECOS, GUROBI, OSQP
DEFAULT_SOCP_SOLVER_STR = "CLARABEL"  # CLARABEL, MOSEK, CVXOPT, SCS, ECOS, GUROBI

# CVXPY args used by default
DEFAULT_CVXPY_ARGS_LP = {"solver": DEFAULT_LP_SOLVER_STR}
DEFAULT_CVXPY_ARGS_SOCP = {"solver": DEFAULT_SOCP_SOLVER_STR}

# Number of generator combinations beyond which the zonotope Minkowski difference warns about its cost
ZONOTOPE_DIFFERENCE_COMBINATIONS_WARN = 10000
