"""
planetgen Source Code
=====================

Modules:
    core_mesh - Icosahedron construction, topology checks, render buffers
    tests     - Test suite

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"planetgen requires Python >= 3.9, got {sys.version}")

# scipy version check (ConvexHull facet checks)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"planetgen requires scipy >= 1.11, got {scipy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"planetgen requires numpy >= 1.20, got {np.__version__}")
