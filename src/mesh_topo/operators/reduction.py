"""
Element Reduction: mixed tri/quad → triangles
=============================================

Triangles pass through unchanged. Each quad (0,1,2,3) is split along the
0-2 diagonal into (0,1,2) then (0,2,3). Output is a flat tri2vtx list with
implicit stride 3.

AREA:
    Both triangles keep the parent winding, so for a planar quad
        A(0,1,2) + A(0,2,3) = A(quad)   (signed, shoelace)
"""

import warnings

import numpy as np

from ..spec.constants import INDEX_DTYPE, QUAD_SPLIT, TRI_ARITY, QUAD_ARITY, TRIS_PER_ARITY
from ..spec.structures import as_index_array, freeze, validate_csr


def element_arities(elem2idx) -> np.ndarray:
    """Vertices per element."""
    return np.diff(as_index_array(elem2idx, "elem2idx"))


def count_triangles(elem2idx) -> int:
    """Number of triangles reduce_to_triangles() will emit (unsupported arities count 0)."""
    arity = element_arities(elem2idx)
    return int(sum(np.count_nonzero(arity == a) * n for a, n in TRIS_PER_ARITY.items()))


def reduce_to_triangles(elem2idx, idx2vtx, skip_unsupported: bool = False) -> np.ndarray:
    """
    Split a mixed triangle/quad element list into triangles.

    Args:
        elem2idx: (num_elem+1,) element offsets
        idx2vtx: element vertex indices
        skip_unsupported: If False (default), elements that are neither
                          triangles nor quads raise. If True they emit no
                          triangle and a UserWarning reports how many were dropped.

    Returns:
        tri2vtx: (3*num_tri,) flat triangle list, elements in input order

    FAIL-FAST:
        Raises ValueError on an unsupported arity unless skip_unsupported.
    """
    elem2idx = as_index_array(elem2idx, "elem2idx")
    idx2vtx = as_index_array(idx2vtx, "idx2vtx")
    validate_csr(elem2idx, idx2vtx, strict=True, name="elem2vtx")

    arity = np.diff(elem2idx)
    unsupported = np.where((arity != TRI_ARITY) & (arity != QUAD_ARITY))[0]
    if len(unsupported) > 0:
        if not skip_unsupported:
            raise ValueError(
                f"Element {unsupported[0]} has {arity[unsupported[0]]} vertices; "
                f"only triangles and quads can be reduced "
                f"({len(unsupported)} unsupported elements)"
            )
        warnings.warn(
            f"reduce_to_triangles: skipped {len(unsupported)} elements with "
            f"unsupported arity (first: element {unsupported[0]})",
            UserWarning
        )

    # Sizing pass, then fill
    num_tri = count_triangles(elem2idx)
    tri2vtx = np.empty(num_tri * 3, dtype=INDEX_DTYPE)

    itri = 0
    for ielem in range(len(elem2idx) - 1):
        start = elem2idx[ielem]
        nnode = arity[ielem]
        if nnode == TRI_ARITY:
            tri2vtx[itri * 3:itri * 3 + 3] = idx2vtx[start:start + 3]
            itri += 1
        elif nnode == QUAD_ARITY:
            for corners in QUAD_SPLIT:
                tri2vtx[itri * 3:itri * 3 + 3] = [idx2vtx[start + c] for c in corners]
                itri += 1

    return freeze(tri2vtx)
