"""
mesh_topo Source Tree
=====================

Modules:
    mesh_topo - CSR mesh topology kernel (incidence, adjacency, reduction, line mesh)
    tests     - Test suite

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.8
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"mesh_topo requires Python >= 3.9, got {sys.version}")

# scipy version check (sparse/csgraph API used by analysis/)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 8):
    raise ImportError(f"mesh_topo requires scipy >= 1.8, got {scipy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"mesh_topo requires numpy >= 1.20, got {np.__version__}")
