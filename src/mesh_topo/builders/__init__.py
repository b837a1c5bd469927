"""
Mesh builders - pure construction, no operators dependency.

EXPORTS:
- Primitives (return tri2vtx, vtx2xyz): cylinders, sphere, hemisphere, torus
- Grids (return elem2idx, idx2vtx, vtx2xy): quad and mixed tri/quad grids
- Fixture: small hand-written mixed mesh
"""

# === Primitives (flat triangle lists) ===
from .primitives import (
    cylinder_open_end_yup,
    cylinder_closed_end_yup,
    sphere_yup,
    hemisphere_zup,
    torus_yup,
)

# === Grids (element CSR) ===
from .grids import build_quad_grid, build_mixed_grid, build_mixed_fixture
