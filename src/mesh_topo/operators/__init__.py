"""Topology operators - incidence, edge adjacency, triangle reduction, line mesh."""

from .incidence import (
    build_incidence,
    build_incidence_vectorized,
)

from .adjacency import (
    build_vertex_adjacency,
    vertex_adjacency_from_elements,
    edges_from_adjacency,
    vertex_degrees,
)

from .reduction import (
    reduce_to_triangles,
    count_triangles,
    element_arities,
)

from .line_mesh import (
    line_mesh_from_adjacency,
    derive_line_mesh,
)

from .topology import build_topology_from_mesh
