"""
Utility functions for pcalab.

This module provides input validation, array conversion and parallel
execution helpers shared by the generators and pipelines.
"""

# Data manipulation and validation utilities
from .data import (
    to_numpy_array,
    as_2d_float_array,
    check_nonnegative,
    check_positive,
    check_random_state,
)

# Parallel execution
from .parallel import parallel_executor, get_parallel_backend, delayed

__all__ = [
    "to_numpy_array",
    "as_2d_float_array",
    "check_nonnegative",
    "check_positive",
    "check_random_state",
    "parallel_executor",
    "get_parallel_backend",
    "delayed",
]
