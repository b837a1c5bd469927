"""
Topology Verification Functions
===============================

Verify structural invariants of incidence and adjacency CSR pairs.

These functions are in analysis/ layer because they consume operator output.
Each verify_* returns a dict; each assert_* is the fail-fast version.
"""

import numpy as np
from scipy.sparse.csgraph import connected_components
from typing import Any, Dict

from ..spec.structures import as_index_array, csr_to_sparse


def verify_incidence(elem2idx, idx2vtx, vtx2jdx, jdx2elem) -> Dict[str, Any]:
    """
    Check vertex → element incidence against element → vertex connectivity.

    INVARIANTS:
        1. Σ group sizes = number of (element, vertex) pairs
        2. e appears in v's group exactly as often as v appears in e

    Both follow from comparing the sparse matrices: the incidence must be the
    transpose of the connectivity.

    Returns:
        dict with:
            'valid': bool - both invariants hold
            'total': int - incidences stored
            'expected_total': int - len(idx2vtx)
            'n_mismatch': int - (vertex, element) entries that disagree
    """
    elem2idx = as_index_array(elem2idx, "elem2idx")
    idx2vtx = as_index_array(idx2vtx, "idx2vtx")
    vtx2jdx = as_index_array(vtx2jdx, "vtx2jdx")
    jdx2elem = as_index_array(jdx2elem, "jdx2elem")

    num_elem = len(elem2idx) - 1
    num_vtx = len(vtx2jdx) - 1

    elem2vtx = csr_to_sparse(elem2idx, idx2vtx, num_vtx)
    vtx2elem = csr_to_sparse(vtx2jdx, jdx2elem, num_elem)
    diff = (vtx2elem - elem2vtx.T.tocsr())
    diff.eliminate_zeros()

    total = int(vtx2jdx[-1])
    expected_total = len(idx2vtx)

    return {
        'valid': total == expected_total and diff.nnz == 0,
        'total': total,
        'expected_total': expected_total,
        'n_mismatch': int(diff.nnz),
    }


def verify_adjacency(vtx2kdx, kdx2vtx, is_bidirectional: bool,
                     edges=None) -> Dict[str, Any]:
    """
    Check vertex → vertex adjacency invariants.

    Args:
        vtx2kdx, kdx2vtx: adjacency CSR
        is_bidirectional: which directionality the adjacency was built with
        edges: optional (n, 2) undirected edges the adjacency must cover
               (used for the exactly-once check in single-representative mode)

    INVARIANTS:
        - ascending: strictly increasing within every group
        - no self-loops
        - bidirectional: w ∈ adj(u) ⇔ u ∈ adj(w)
        - single representative: each edge {u,w} stored once, under min(u,w)

    Returns:
        dict with 'valid' plus one bool per invariant
    """
    vtx2kdx = as_index_array(vtx2kdx, "vtx2kdx")
    kdx2vtx = as_index_array(kdx2vtx, "kdx2vtx")
    num_vtx = len(vtx2kdx) - 1

    kdx2src = np.repeat(np.arange(num_vtx), np.diff(vtx2kdx))

    # Ascending: consecutive entries of the same group must increase
    same_group = kdx2src[1:] == kdx2src[:-1]
    ascending = bool(np.all(kdx2vtx[1:][same_group] > kdx2vtx[:-1][same_group]))

    no_self_loop = bool(np.all(kdx2src != kdx2vtx))

    adj = csr_to_sparse(vtx2kdx, kdx2vtx, num_vtx)
    asym = adj - adj.T.tocsr()
    asym.eliminate_zeros()
    symmetric = asym.nnz == 0

    # Single representative: never both directions, always owned by lower index
    both = adj.multiply(adj.T).tocsr()
    both.eliminate_zeros()
    owned_by_lower = bool(np.all(kdx2vtx > kdx2src))
    exactly_once = both.nnz == 0 and owned_by_lower

    covers_edges = True
    if edges is not None:
        edges = np.asarray(edges).reshape(-1, 2)
        if len(edges) > 0:
            lo = np.minimum(edges[:, 0], edges[:, 1])
            hi = np.maximum(edges[:, 0], edges[:, 1])
            if is_bidirectional:
                hits = (np.asarray(adj[lo, hi]).ravel() > 0) & (np.asarray(adj[hi, lo]).ravel() > 0)
            else:
                hits = np.asarray(adj[lo, hi]).ravel() > 0
            covers_edges = bool(np.all(hits))

    if is_bidirectional:
        valid = ascending and no_self_loop and symmetric and covers_edges
    else:
        valid = ascending and no_self_loop and exactly_once and covers_edges

    return {
        'valid': valid,
        'ascending': ascending,
        'no_self_loop': no_self_loop,
        'symmetric': symmetric,
        'exactly_once': exactly_once,
        'covers_edges': covers_edges,
        'num_entries': len(kdx2vtx),
    }


def assert_adjacency(vtx2kdx, kdx2vtx, is_bidirectional: bool,
                     edges=None, context: str = "") -> None:
    """
    Fail-fast version of verify_adjacency().

    Raises:
        ValueError: naming every invariant that failed
    """
    result = verify_adjacency(vtx2kdx, kdx2vtx, is_bidirectional, edges)
    if not result['valid']:
        ctx = f" [{context}]" if context else ""
        checks = ['ascending', 'no_self_loop', 'covers_edges']
        checks.append('symmetric' if is_bidirectional else 'exactly_once')
        failed = [name for name in checks if not result[name]]
        raise ValueError(f"adjacency invariant violated{ctx}: {failed}")


def assert_incidence(elem2idx, idx2vtx, vtx2jdx, jdx2elem, context: str = "") -> None:
    """Fail-fast version of verify_incidence()."""
    result = verify_incidence(elem2idx, idx2vtx, vtx2jdx, jdx2elem)
    if not result['valid']:
        ctx = f" [{context}]" if context else ""
        raise ValueError(
            f"incidence invariant violated{ctx}: "
            f"total={result['total']} (expected {result['expected_total']}), "
            f"{result['n_mismatch']} mismatched entries"
        )


def count_connected_components(vtx2kdx, kdx2vtx) -> int:
    """
    Number of connected components of the vertex graph.

    Works with either directionality (the graph is treated as undirected).
    Isolated vertices count as their own component.
    """
    vtx2kdx = as_index_array(vtx2kdx, "vtx2kdx")
    num_vtx = len(vtx2kdx) - 1
    if num_vtx == 0:
        return 0
    adj = csr_to_sparse(vtx2kdx, kdx2vtx, num_vtx)
    n_components, _ = connected_components(adj, directed=False)
    return int(n_components)


def euler_characteristic(num_vtx: int, num_edge: int, num_face: int) -> int:
    """χ = V - E + F.  Sphere-like closed surfaces: 2, torus: 0."""
    return num_vtx - num_edge + num_face
