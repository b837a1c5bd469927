"""
Line Mesh (edge segments) from connectivity
===========================================

    elements ──build_incidence──▶ vtx2elem
             ──build_vertex_adjacency(is_bidirectional=False)──▶ vtx2vtx
             ──line_mesh_from_adjacency──▶ line2vtx

The single-representative adjacency guarantees every undirected edge
appears in exactly one group, so line_mesh_from_adjacency() never has to
deduplicate: one (v, w) segment per adjacency entry, with v < w.
"""

import numpy as np

from ..spec.structures import as_index_array, freeze, validate_csr
from .incidence import build_incidence
from .adjacency import build_vertex_adjacency, edges_from_adjacency


def line_mesh_from_adjacency(vtx2kdx, kdx2vtx) -> np.ndarray:
    """
    Flatten a vertex adjacency into line elements.

    Args:
        vtx2kdx, kdx2vtx: vertex → vertex adjacency

    Returns:
        line2vtx: (2*n,) flat list, one (v, w) pair per adjacency entry, in
                  CSR order. No deduplication is applied.
    """
    vtx2kdx = as_index_array(vtx2kdx, "vtx2kdx")
    kdx2vtx = as_index_array(kdx2vtx, "kdx2vtx")
    validate_csr(vtx2kdx, kdx2vtx, len(vtx2kdx) - 1, strict=True, name="vtx2vtx")

    line2vtx = edges_from_adjacency(vtx2kdx, kdx2vtx).reshape(-1)
    return freeze(line2vtx)


def derive_line_mesh(elem2idx, idx2vtx, num_vtx: int) -> np.ndarray:
    """
    Line mesh of all element edges of a mixed tri/quad mesh.

    Args:
        elem2idx, idx2vtx: element connectivity
        num_vtx: total vertex count

    Returns:
        line2vtx: (2*E,) flat list, each undirected edge exactly once as (v, w), v < w
    """
    vtx2jdx, jdx2elem = build_incidence(elem2idx, idx2vtx, num_vtx)
    vtx2kdx, kdx2vtx = build_vertex_adjacency(
        elem2idx, idx2vtx,
        vtx2jdx, jdx2elem,
        is_bidirectional=False)
    return line_mesh_from_adjacency(vtx2kdx, kdx2vtx)
