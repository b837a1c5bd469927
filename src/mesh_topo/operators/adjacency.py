"""
Vertex -> Vertex Edge Adjacency
===============================

Pure combinatorics - NO geometry.

DEFINITION:
    w ∈ kdx2vtx[vtx2kdx[v]:vtx2kdx[v+1]]  iff  {v, w} is a templated edge
    of some element incident to v.

EDGE TEMPLATES (local corner pairs, spec/constants.py):
    triangle: (0,1) (1,2) (2,0)
    quad:     (0,1) (1,2) (2,3) (3,0)

DIRECTIONALITY:
    is_bidirectional=True   w is stored under v AND v under w (symmetric)
    is_bidirectional=False  {v, w} stored once, under min(v, w)

    Line meshes need the single-representative form (no duplicate segments);
    per-vertex neighbor iteration needs the symmetric form.

GROUP INVARIANTS (both modes):
    - strictly increasing
    - no self-loops (an element with a repeated vertex gives no v-v edge)

    Ascending order is load-bearing: each group is produced by sorting a set,
    never by insertion order.

COMPLEXITY:
    O(incidences × edges-per-element). No pairwise vertex comparison.
"""

import numpy as np
from typing import Tuple

from ..spec.constants import INDEX_DTYPE, EDGES_BY_ARITY, SUPPORTED_ARITIES
from ..spec.structures import as_index_array, freeze, validate_csr
from .incidence import build_incidence


def build_vertex_adjacency(elem2idx, idx2vtx, vtx2jdx, jdx2elem,
                           is_bidirectional: bool) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build vertex → vertex edge adjacency from mixed tri/quad connectivity.

    Args:
        elem2idx: (num_elem+1,) element offsets
        idx2vtx: element vertex indices
        vtx2jdx, jdx2elem: vertex → element incidence (from build_incidence)
        is_bidirectional: store each edge under both endpoints (True)
                          or only under the lower-indexed one (False)

    Returns:
        vtx2kdx: (num_vtx+1,) offsets, num_vtx = len(vtx2jdx) - 1
        kdx2vtx: neighbor indices, ascending within each group

    FAIL-FAST:
        Raises ValueError if an incident element is not a triangle or quad.
    """
    elem2idx = as_index_array(elem2idx, "elem2idx")
    idx2vtx = as_index_array(idx2vtx, "idx2vtx")
    vtx2jdx = as_index_array(vtx2jdx, "vtx2jdx")
    jdx2elem = as_index_array(jdx2elem, "jdx2elem")
    validate_csr(vtx2jdx, jdx2elem, len(elem2idx) - 1, strict=True, name="vtx2elem")

    num_vtx = len(vtx2jdx) - 1

    vtx2kdx = np.zeros(num_vtx + 1, dtype=INDEX_DTYPE)
    kdx2vtx = []

    for ivtx in range(num_vtx):
        neighbors = set()
        for jdx in range(vtx2jdx[ivtx], vtx2jdx[ivtx + 1]):
            ielem = jdx2elem[jdx]
            start = elem2idx[ielem]
            nnode = elem2idx[ielem + 1] - start
            if nnode not in EDGES_BY_ARITY:
                raise ValueError(
                    f"Element {ielem} has {nnode} vertices, "
                    f"supported arities are {SUPPORTED_ARITIES}"
                )
            for inode0, inode1 in EDGES_BY_ARITY[nnode]:
                ivtx0 = idx2vtx[start + inode0]
                ivtx1 = idx2vtx[start + inode1]
                if ivtx0 != ivtx and ivtx1 != ivtx:
                    continue
                jvtx = ivtx1 if ivtx0 == ivtx else ivtx0
                if jvtx == ivtx:
                    continue  # degenerate edge
                if is_bidirectional or jvtx > ivtx:
                    neighbors.add(int(jvtx))
        kdx2vtx.extend(sorted(neighbors))
        vtx2kdx[ivtx + 1] = vtx2kdx[ivtx] + len(neighbors)

    kdx2vtx = np.array(kdx2vtx, dtype=INDEX_DTYPE)

    return freeze(vtx2kdx, kdx2vtx)


def vertex_adjacency_from_elements(elem2idx, idx2vtx, num_vtx: int,
                                   is_bidirectional: bool = True) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convenience: incidence + adjacency in one call.

    Args:
        elem2idx, idx2vtx: element connectivity
        num_vtx: total vertex count
        is_bidirectional: see build_vertex_adjacency()

    Returns:
        vtx2kdx, kdx2vtx
    """
    vtx2jdx, jdx2elem = build_incidence(elem2idx, idx2vtx, num_vtx)
    return build_vertex_adjacency(elem2idx, idx2vtx, vtx2jdx, jdx2elem, is_bidirectional)


def edges_from_adjacency(vtx2kdx, kdx2vtx) -> np.ndarray:
    """
    Expand an adjacency CSR into an (n, 2) array of (v, w) rows.

    Row order follows the CSR: grouped by v, ascending w inside a group.
    """
    vtx2kdx = as_index_array(vtx2kdx, "vtx2kdx")
    kdx2vtx = as_index_array(kdx2vtx, "kdx2vtx")
    num_vtx = len(vtx2kdx) - 1
    kdx2src = np.repeat(np.arange(num_vtx, dtype=INDEX_DTYPE), np.diff(vtx2kdx))
    return np.stack([kdx2src, kdx2vtx], axis=1)


def vertex_degrees(vtx2kdx) -> np.ndarray:
    """Number of neighbors per vertex (bidirectional adjacency → valence)."""
    return np.diff(as_index_array(vtx2kdx, "vtx2kdx"))
