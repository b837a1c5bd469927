"""
Vertex -> Element Incidence
===========================

Pure combinatorics - NO geometry.

DEFINITION:
    Given element -> vertex connectivity (elem2idx, idx2vtx), build the
    inverse relation vertex -> element (vtx2jdx, jdx2elem):

        e ∈ jdx2elem[vtx2jdx[v]:vtx2jdx[v+1]]   ⇔   v ∈ idx2vtx[elem2idx[e]:elem2idx[e+1]]

ALGORITHM (counting sort, linear time):
    1. Count incidences per vertex
    2. Exclusive prefix sum → offsets
    3. Scatter element indices through a write cursor initialized from offsets

    The cursor is a separate array; offsets are never consumed, so no
    shift-back pass is needed afterwards.

ORDERING:
    Within a vertex's group, element indices appear in element-visitation
    order (increasing element index). Deterministic for a fixed input.

IDENTITIES:
    1. vtx2jdx[-1] == len(idx2vtx)       (every incidence scattered once)
    2. multiplicity of e in group v == multiplicity of v in element e
"""

import numpy as np
from typing import Tuple

from ..spec.constants import INDEX_DTYPE
from ..spec.structures import as_index_array, freeze, validate_elements, validate_csr


def count_incidences(idx2vtx: np.ndarray, num_vtx: int) -> np.ndarray:
    """
    Counting pass: number of incidences per vertex.

    Returns:
        vtx2cnt: (num_vtx,) counts
    """
    return np.bincount(idx2vtx, minlength=num_vtx).astype(INDEX_DTYPE)


def exclusive_prefix_sum(counts: np.ndarray) -> np.ndarray:
    """(N,) counts → (N+1,) offsets with offsets[0] = 0."""
    offsets = np.zeros(len(counts) + 1, dtype=INDEX_DTYPE)
    np.cumsum(counts, out=offsets[1:])
    return offsets


def build_incidence(elem2idx, idx2vtx, num_vtx: int,
                    verify: bool = True) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build vertex → element incidence (elements surrounding each vertex).

    Args:
        elem2idx: (num_elem+1,) element offsets
        idx2vtx: element vertex indices
        num_vtx: total vertex count (≥ 1 + max(idx2vtx))
        verify: if True (default), validate connectivity before allocating.
                Out-of-range vertex indices and arities other than 3/4 raise.

    Returns:
        vtx2jdx: (num_vtx+1,) offsets
        jdx2elem: (len(idx2vtx),) incident element indices

    FAIL-FAST:
        Raises ValueError if any vertex index is ≥ num_vtx (verify=True).

    EXAMPLE:
        elem2idx = [0, 3, 7, 11, 14]
        idx2vtx  = [0, 4, 2,  4, 3, 5, 2,  1, 6, 7, 5,  3, 1, 5]
        → vtx2jdx  = [0, 1, 3, 5, 7, 9, 12, 13, 14]
          jdx2elem = [0, 2, 3, 0, 1, 1, 3, 0, 1, 1, 2, 3, 2, 2]
    """
    elem2idx = as_index_array(elem2idx, "elem2idx")
    idx2vtx = as_index_array(idx2vtx, "idx2vtx")
    if verify:
        validate_elements(elem2idx, idx2vtx, num_vtx, strict=True)
    else:
        validate_csr(elem2idx, idx2vtx, num_vtx, strict=True, name="elem2vtx")

    num_elem = len(elem2idx) - 1

    vtx2jdx = exclusive_prefix_sum(count_incidences(idx2vtx, num_vtx))

    # Owning element of every incidence slot, in visitation order
    idx2elem = np.repeat(np.arange(num_elem, dtype=INDEX_DTYPE), np.diff(elem2idx))

    # Scatter: cursor[v] is the next free slot of vertex v
    cursor = vtx2jdx[:-1].copy()
    jdx2elem = np.empty(vtx2jdx[-1], dtype=INDEX_DTYPE)
    for idx in range(len(idx2vtx)):
        ivtx = idx2vtx[idx]
        jdx2elem[cursor[ivtx]] = idx2elem[idx]
        cursor[ivtx] += 1

    # Every cursor must have reached the start of the next group
    if not np.array_equal(cursor, vtx2jdx[1:]):
        raise ValueError("Incidence scatter did not fill every vertex group")

    return freeze(vtx2jdx, jdx2elem)


def build_incidence_vectorized(elem2idx, idx2vtx, num_vtx: int,
                               verify: bool = True) -> Tuple[np.ndarray, np.ndarray]:
    """
    Same result as build_incidence(), scatter done with a stable sort.

    A stable argsort of idx2vtx groups incidences by vertex while keeping
    element-visitation order inside each group, so the output is identical
    to the cursor scatter. O(n log n), but no Python-level loop; use for
    large meshes.
    """
    elem2idx = as_index_array(elem2idx, "elem2idx")
    idx2vtx = as_index_array(idx2vtx, "idx2vtx")
    if verify:
        validate_elements(elem2idx, idx2vtx, num_vtx, strict=True)
    else:
        validate_csr(elem2idx, idx2vtx, num_vtx, strict=True, name="elem2vtx")

    num_elem = len(elem2idx) - 1
    vtx2jdx = exclusive_prefix_sum(count_incidences(idx2vtx, num_vtx))
    idx2elem = np.repeat(np.arange(num_elem, dtype=INDEX_DTYPE), np.diff(elem2idx))
    order = np.argsort(idx2vtx, kind='stable')
    jdx2elem = idx2elem[order]

    return freeze(vtx2jdx, jdx2elem)


# Self-test when run directly
# Run with: python -m mesh_topo.operators.incidence (from src/)
if __name__ == "__main__":
    print("=" * 60)
    print("INCIDENCE - VERIFICATION")
    print("=" * 60)

    elem2idx = [0, 3, 7, 11, 14]
    idx2vtx = [0, 4, 2, 4, 3, 5, 2, 1, 6, 7, 5, 3, 1, 5]
    vtx2jdx, jdx2elem = build_incidence(elem2idx, idx2vtx, 8)

    print(f"\nvtx2jdx  = {vtx2jdx.tolist()}")
    print(f"jdx2elem = {jdx2elem.tolist()}")
    print(f"\nTotal incidences: {vtx2jdx[-1]} (expected {len(idx2vtx)})")

    print("\n" + "=" * 60)
    print("Verification complete.")
    print("=" * 60)
