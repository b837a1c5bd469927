"""
MESH_TOPO - CSR mesh topology kernel
====================================

NO rendering. NO file export. NO quality metrics.

Structure:
    spec/       - Constants and CSR/mesh contract
    operators/  - Incidence, edge adjacency, triangle reduction, line mesh
    analysis/   - Invariant verification, 2D triangle helpers
    builders/   - Primitive surface generators (input producers)

All relations are CSR pairs (offsets, values) of int64 arrays, read-only
once returned.
"""

from . import spec
from . import operators
from . import analysis
from . import builders

from .operators import (
    build_incidence,
    build_vertex_adjacency,
    reduce_to_triangles,
    derive_line_mesh,
    line_mesh_from_adjacency,
)

__version__ = "0.1.0"
