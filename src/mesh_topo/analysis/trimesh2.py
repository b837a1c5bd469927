"""
2D Triangle Mesh Helpers
========================

Per-triangle and per-vertex geometric quantities for planar triangle meshes.

INPUT CONVENTION:
    tri2vtx: flat (3*T,) or (T, 3) vertex indices (e.g. reduce_to_triangles output)
    vtx2xy:  (N, 2) coordinates (flat (2*N,) is accepted)

SIGN CONVENTION:
    Signed areas are positive for counter-clockwise triangles.
"""

import numpy as np
from typing import Optional, Tuple

from ..spec.constants import EPS_ZERO


def _as_tri(tri2vtx) -> np.ndarray:
    return np.asarray(tri2vtx).reshape(-1, 3)


def _as_xy(vtx2xy) -> np.ndarray:
    return np.asarray(vtx2xy, dtype=float).reshape(-1, 2)


def signed_area(p0, p1, p2) -> float:
    """Signed area of triangle (p0, p1, p2); positive if CCW."""
    return 0.5 * ((p1[0] - p0[0]) * (p2[1] - p0[1]) - (p2[0] - p0[0]) * (p1[1] - p0[1]))


def signed_area_of_polygon(vtx2xy, loop) -> float:
    """
    Shoelace area of a simple polygon given by vertex indices.

    Args:
        vtx2xy: (N, 2) coordinates
        loop: vertex indices in winding order

    Returns:
        signed area (positive if CCW)
    """
    xy = _as_xy(vtx2xy)[np.asarray(loop)]
    x, y = xy[:, 0], xy[:, 1]
    return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def tri2area(tri2vtx, vtx2xy) -> np.ndarray:
    """
    Signed area of every triangle.

    Returns:
        (T,) array
    """
    tri = _as_tri(tri2vtx)
    xy = _as_xy(vtx2xy)
    p0, p1, p2 = xy[tri[:, 0]], xy[tri[:, 1]], xy[tri[:, 2]]
    return 0.5 * ((p1[:, 0] - p0[:, 0]) * (p2[:, 1] - p0[:, 1])
                  - (p2[:, 0] - p0[:, 0]) * (p1[:, 1] - p0[:, 1]))


def vtx2area(tri2vtx, vtx2xy) -> np.ndarray:
    """
    Area associated with each vertex: one third of every incident triangle.

    PROPERTY:
        Σ vtx2area = Σ tri2area
    """
    tri = _as_tri(tri2vtx)
    xy = _as_xy(vtx2xy)
    third = tri2area(tri, xy) / 3.0
    out = np.zeros(len(xy))
    for k in range(3):
        np.add.at(out, tri[:, k], third)
    return out


def tri2circumcenter(tri2vtx, vtx2xy) -> np.ndarray:
    """
    Circumcenter of every triangle.

    Returns:
        (T, 2) array

    FAIL-FAST:
        Raises ValueError for a degenerate (zero-area) triangle.
    """
    tri = _as_tri(tri2vtx)
    xy = _as_xy(vtx2xy)
    p0, p1, p2 = xy[tri[:, 0]], xy[tri[:, 1]], xy[tri[:, 2]]

    a = p1 - p0
    b = p2 - p0
    d = 2.0 * (a[:, 0] * b[:, 1] - a[:, 1] * b[:, 0])
    bad = np.where(np.abs(d) < EPS_ZERO)[0]
    if len(bad) > 0:
        raise ValueError(f"Triangle {bad[0]} is degenerate, circumcenter undefined")

    a2 = np.sum(a * a, axis=1)
    b2 = np.sum(b * b, axis=1)
    ux = (b[:, 1] * a2 - a[:, 1] * b2) / d
    uy = (a[:, 0] * b2 - b[:, 0] * a2) / d
    return p0 + np.stack([ux, uy], axis=1)


def is_inside(p0, p1, p2, q, sign: float = 1.0) -> Optional[Tuple[float, float]]:
    """
    Point-in-triangle test.

    Args:
        p0, p1, p2: triangle corners
        q: query point
        sign: +1 for CCW triangles, -1 to test CW triangles

    Returns:
        (r0, r1) barycentric weights of p0 and p1 if q is inside (or on the
        boundary), else None. Weight of p2 is 1 - r0 - r1.
    """
    a0 = signed_area(q, p1, p2) * sign
    if a0 < 0.0:
        return None
    a1 = signed_area(p0, q, p2) * sign
    if a1 < 0.0:
        return None
    a2 = signed_area(p0, p1, q) * sign
    if a2 < 0.0:
        return None
    total = a0 + a1 + a2
    if total < EPS_ZERO:
        return None
    return a0 / total, a1 / total


def search_bruteforce_one_triangle_include_input_point(
        q, tri2vtx, vtx2xy) -> Optional[Tuple[int, float, float]]:
    """
    Find the first triangle containing q by scanning all triangles.

    Returns:
        (i_tri, r0, r1) with barycentric weights of corners 0 and 1, or None
    """
    tri = _as_tri(tri2vtx)
    xy = _as_xy(vtx2xy)
    for i_tri, (i0, i1, i2) in enumerate(tri):
        hit = is_inside(xy[i0], xy[i1], xy[i2], q)
        if hit is None:
            continue
        return i_tri, hit[0], hit[1]
    return None


def to_corner_points(tri2vtx, vtx2xy, i_tri: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Corner coordinates of triangle i_tri."""
    tri = _as_tri(tri2vtx)
    xy = _as_xy(vtx2xy)
    i0, i1, i2 = tri[i_tri]
    return xy[i0].copy(), xy[i1].copy(), xy[i2].copy()


def area_of_a_triangle(tri2vtx, vtx2xy, i_tri: int) -> float:
    """Signed area of triangle i_tri."""
    return signed_area(*to_corner_points(tri2vtx, vtx2xy, i_tri))
