"""
Planar Grid Builders (mixed triangle/quad CSR)
==============================================

Structured 2D grids returned directly as element CSR, for exercising the
mixed tri/quad code paths.

VERTEX NUMBERING:
    v(i, j) = j * (nx + 1) + i,   0 ≤ i ≤ nx, 0 ≤ j ≤ ny

CELL (i, j) corners, counter-clockwise:
    v00 = v(i, j), v10 = v(i+1, j), v11 = v(i+1, j+1), v01 = v(i, j+1)

EDGE COUNT:
    quad grid:  E = nx(ny+1) + (nx+1)ny
    mixed grid: E = quad grid + number of split cells (one diagonal each)
"""

import numpy as np
from typing import Tuple

from ..spec.constants import INDEX_DTYPE, COORD_DTYPE
from ..spec.structures import csr_from_elements


def _grid_vertices(nx: int, ny: int) -> np.ndarray:
    if nx < 1 or ny < 1:
        raise ValueError(f"Grid needs nx, ny ≥ 1, got nx={nx}, ny={ny}")
    xs, ys = np.meshgrid(np.arange(nx + 1), np.arange(ny + 1))
    return np.stack([xs.ravel(), ys.ravel()], axis=1).astype(COORD_DTYPE)


def _cell_corners(nx: int, i: int, j: int) -> Tuple[int, int, int, int]:
    v00 = j * (nx + 1) + i
    return v00, v00 + 1, v00 + nx + 2, v00 + nx + 1


def build_quad_grid(nx: int, ny: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    nx × ny grid of unit quads.

    Returns:
        elem2idx, idx2vtx: quad connectivity (CCW)
        vtx2xy: ((nx+1)(ny+1), 2) coordinates
    """
    vtx2xy = _grid_vertices(nx, ny)
    elements = [list(_cell_corners(nx, i, j)) for j in range(ny) for i in range(nx)]
    elem2idx, idx2vtx = csr_from_elements(elements)
    return elem2idx, idx2vtx, vtx2xy


def build_mixed_grid(nx: int, ny: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    nx × ny grid where cells with (i + j) odd are split into two triangles.

    Split cells use the v10-v01 diagonal (the opposite of the quad split
    diagonal), so reducing this mesh produces both diagonal directions.

    Returns:
        elem2idx, idx2vtx: mixed tri/quad connectivity (CCW)
        vtx2xy: ((nx+1)(ny+1), 2) coordinates
    """
    vtx2xy = _grid_vertices(nx, ny)
    elements = []
    for j in range(ny):
        for i in range(nx):
            v00, v10, v11, v01 = _cell_corners(nx, i, j)
            if (i + j) % 2 == 0:
                elements.append([v00, v10, v11, v01])
            else:
                elements.append([v00, v10, v01])
                elements.append([v10, v11, v01])
    elem2idx, idx2vtx = csr_from_elements(elements)
    return elem2idx, idx2vtx, vtx2xy


def build_mixed_fixture() -> Tuple[np.ndarray, np.ndarray, int]:
    """
    Small mixed mesh: 2 triangles + 2 quads over 8 vertices.

        e0 = (0, 4, 2)        triangle
        e1 = (4, 3, 5, 2)     quad
        e2 = (1, 6, 7, 5)     quad
        e3 = (3, 1, 5)        triangle

    Returns:
        elem2idx, idx2vtx, num_vtx
    """
    elem2idx = np.array([0, 3, 7, 11, 14], dtype=INDEX_DTYPE)
    idx2vtx = np.array([0, 4, 2, 4, 3, 5, 2, 1, 6, 7, 5, 3, 1, 5], dtype=INDEX_DTYPE)
    return elem2idx, idx2vtx, 8
