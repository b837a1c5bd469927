"""
Contract-aware wrapper: all derived connectivity of one mesh dict.
"""

from ..spec.structures import validate_mesh
from ..analysis.verify_topology import assert_incidence, assert_adjacency
from .incidence import build_incidence
from .adjacency import build_vertex_adjacency, edges_from_adjacency
from .reduction import reduce_to_triangles
from .line_mesh import line_mesh_from_adjacency


def build_topology_from_mesh(mesh: dict) -> dict:
    """
    Build every derived relation from a contract-compliant mesh dict.

    Args:
        mesh: Contract-compliant mesh dict (spec.structures.create_mesh)

    Returns:
        dict with:
            vtx2elem: (vtx2jdx, jdx2elem) incidence
            vtx2vtx: (vtx2kdx, kdx2vtx) bidirectional adjacency
            edges: (E, 2) undirected edges, v < w
            tri2vtx: flat triangle list
            line2vtx: flat line list (= edges flattened)
            counts: num_vtx, num_elem, num_tri, num_edge

    VERIFICATION:
        Incidence and both adjacency forms are checked fail-fast.
    """
    validate_mesh(mesh, strict=True)

    elem2idx = mesh['elem2idx']
    idx2vtx = mesh['idx2vtx']
    num_vtx = mesh['num_vtx']
    name = mesh.get('name', 'mesh')

    vtx2jdx, jdx2elem = build_incidence(elem2idx, idx2vtx, num_vtx)
    assert_incidence(elem2idx, idx2vtx, vtx2jdx, jdx2elem, context=name)

    vtx2kdx, kdx2vtx = build_vertex_adjacency(
        elem2idx, idx2vtx, vtx2jdx, jdx2elem, is_bidirectional=True)
    assert_adjacency(vtx2kdx, kdx2vtx, is_bidirectional=True, context=name)

    # Single representative per edge → line mesh without duplicate segments
    vtx2kdx_uni, kdx2vtx_uni = build_vertex_adjacency(
        elem2idx, idx2vtx, vtx2jdx, jdx2elem, is_bidirectional=False)
    edges = edges_from_adjacency(vtx2kdx_uni, kdx2vtx_uni)
    assert_adjacency(vtx2kdx_uni, kdx2vtx_uni, is_bidirectional=False, context=name)

    line2vtx = line_mesh_from_adjacency(vtx2kdx_uni, kdx2vtx_uni)
    tri2vtx = reduce_to_triangles(elem2idx, idx2vtx)

    # Symmetric form stores every edge twice
    if len(kdx2vtx) != 2 * len(edges):
        raise ValueError(f"[{name}] bidirectional adjacency has {len(kdx2vtx)} entries, "
                         f"expected 2E = {2 * len(edges)}")

    return {
        'vtx2elem': (vtx2jdx, jdx2elem),
        'vtx2vtx': (vtx2kdx, kdx2vtx),
        'edges': edges,
        'tri2vtx': tri2vtx,
        'line2vtx': line2vtx,
        'counts': {
            'num_vtx': num_vtx,
            'num_elem': len(elem2idx) - 1,
            'num_tri': len(tri2vtx) // 3,
            'num_edge': len(edges),
        },
    }
