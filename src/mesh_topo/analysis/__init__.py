"""
Analysis functions - depend on operators layer output.

Separated from operators to maintain clean layering:
    builders  → spec
    operators → spec
    analysis  → operators → spec

Includes:
- verify_topology: incidence/adjacency invariants, connected components
- trimesh2: 2D triangle areas, circumcenters, point location
"""

from .verify_topology import (
    verify_incidence,
    verify_adjacency,
    assert_incidence,
    assert_adjacency,
    count_connected_components,
    euler_characteristic,
)
from .trimesh2 import (
    tri2area,
    vtx2area,
    tri2circumcenter,
    search_bruteforce_one_triangle_include_input_point,
    to_corner_points,
    area_of_a_triangle,
    signed_area_of_polygon,
)
