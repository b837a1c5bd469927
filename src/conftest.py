"""
Pytest Configuration
====================

Puts src/ on sys.path so mesh_topo imports without installation, and
provides the shared meshes used across tests/core/.

Usage:
    cd src
    pytest tests/ -v
"""

import sys
from pathlib import Path

import pytest

src_root = Path(__file__).parent
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from mesh_topo.builders import build_mixed_fixture, build_mixed_grid, sphere_yup
from mesh_topo.spec import create_mesh, csr_from_uniform


@pytest.fixture
def mixed_fixture():
    """(elem2idx, idx2vtx, num_vtx) of the 2-tri + 2-quad fixture."""
    return build_mixed_fixture()


@pytest.fixture
def mixed_grid_mesh():
    """Contract mesh dict of a 3×2 mixed tri/quad grid."""
    elem2idx, idx2vtx, vtx2xy = build_mixed_grid(3, 2)
    return create_mesh(vtx2xy, elem2idx, idx2vtx, name="mixed_3x2")


@pytest.fixture
def sphere_mesh():
    """Contract mesh dict of a UV sphere (χ = 2)."""
    tri2vtx, vtx2xyz = sphere_yup(1.0, 6, 10)
    return create_mesh(vtx2xyz, *csr_from_uniform(tri2vtx, 3), name="sphere")
