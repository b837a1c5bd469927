"""
Primitive Surface Generators
============================

Triangle meshes of simple closed-form shapes, used as input for the
topology operators.

RETURN CONVENTION (all builders):
    tri2vtx: (3*T,) flat int64 triangle list
    vtx2xyz: (N, 3) float coordinates

TOPOLOGY (χ = V - E + F):
    cylinder_open_end_yup    annulus    χ = 0
    cylinder_closed_end_yup  sphere     χ = 2
    sphere_yup               sphere     χ = 2
    hemisphere_zup           disk       χ = 1
    torus_yup                torus      χ = 0
"""

import warnings

import numpy as np
from typing import Tuple

from ..spec.constants import INDEX_DTYPE, COORD_DTYPE


def _empty() -> Tuple[np.ndarray, np.ndarray]:
    return np.zeros(0, dtype=INDEX_DTYPE), np.zeros((0, 3), dtype=COORD_DTYPE)


def cylinder_open_end_yup(ndiv_circumference: int,
                          ndiv_side: int,
                          radius: float,
                          length: float,
                          is_center: bool) -> Tuple[np.ndarray, np.ndarray]:
    """
    Open cylinder (no caps) around the y axis.

    Args:
        ndiv_circumference: vertices per ring (> 2)
        ndiv_side: divisions along the axis (≥ 1)
        radius, length: cylinder size
        is_center: if True, y ∈ [-length/2, length/2]; else y ∈ [0, length]

    Returns:
        tri2vtx, vtx2xyz with V = ndiv_circumference * (ndiv_side + 1)
    """
    if ndiv_circumference <= 2:
        raise ValueError(f"ndiv_circumference must be > 2, got {ndiv_circumference}")
    if ndiv_side < 1:
        raise ValueError(f"ndiv_side must be ≥ 1, got {ndiv_side}")

    dr = 2.0 * np.pi / ndiv_circumference
    y_min = -0.5 * length if is_center else 0.0

    vtx2xyz = np.zeros((ndiv_circumference * (ndiv_side + 1), 3), dtype=COORD_DTYPE)
    for i_side in range(ndiv_side + 1):
        y0 = y_min + length * i_side / ndiv_side
        for ilo in range(ndiv_circumference):
            i_vtx = i_side * ndiv_circumference + ilo
            vtx2xyz[i_vtx] = [radius * np.cos(dr * ilo), y0, radius * np.sin(dr * ilo)]

    tri2vtx = []
    for i_side in range(ndiv_side):
        for i_edge in range(ndiv_circumference):
            i0 = i_side * ndiv_circumference + i_edge
            i1 = i_side * ndiv_circumference + (i_edge + 1) % ndiv_circumference
            i2 = i0 + ndiv_circumference
            i3 = i1 + ndiv_circumference
            tri2vtx.extend([i0, i3, i1])
            tri2vtx.extend([i0, i2, i3])

    return np.array(tri2vtx, dtype=INDEX_DTYPE), vtx2xyz


def cylinder_like_topology(ndiv_side: int, ndiv_circumference: int) -> np.ndarray:
    """
    Connectivity of a capped tube: apex 0, (ndiv_side+1) rings, apex at the end.

    Rings are numbered from 1, ndiv_circumference vertices each.

    Returns:
        tri2vtx: flat triangle list
    """
    n_ring = ndiv_side + 1
    top = n_ring * ndiv_circumference + 1

    tri2vtx = []
    for ic in range(ndiv_circumference):
        tri2vtx.extend([0,
                        ic % ndiv_circumference + 1,
                        (ic + 1) % ndiv_circumference + 1])
    for ih in range(n_ring - 1):
        for ic in range(ndiv_circumference):
            i1 = ih * ndiv_circumference + 1 + ic % ndiv_circumference
            i2 = ih * ndiv_circumference + 1 + (ic + 1) % ndiv_circumference
            i3 = (ih + 1) * ndiv_circumference + 1 + (ic + 1) % ndiv_circumference
            i4 = (ih + 1) * ndiv_circumference + 1 + ic % ndiv_circumference
            tri2vtx.extend([i3, i2, i1])
            tri2vtx.extend([i4, i3, i1])
    last = (n_ring - 1) * ndiv_circumference + 1
    for ic in range(ndiv_circumference):
        tri2vtx.extend([top,
                        last + (ic + 1) % ndiv_circumference,
                        last + ic % ndiv_circumference])

    return np.array(tri2vtx, dtype=INDEX_DTYPE)


def cylinder_closed_end_yup(radius: float,
                            length: float,
                            ndiv_circumference: int,
                            ndiv_length: int,
                            is_center: bool) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cylinder with both ends closed by a triangle fan.

    Returns:
        tri2vtx, vtx2xyz with V = ndiv_circumference * (ndiv_length + 1) + 2
    """
    if ndiv_length < 1:
        raise ValueError(f"ndiv_length must be ≥ 1, got {ndiv_length}")
    if ndiv_circumference <= 2:
        raise ValueError(f"ndiv_circumference must be > 2, got {ndiv_circumference}")

    num_vtx = ndiv_circumference * (ndiv_length + 1) + 2
    dl = length / ndiv_length
    dr = 2.0 * np.pi / ndiv_circumference
    y_min = -0.5 * length if is_center else 0.0

    vtx2xyz = np.zeros((num_vtx, 3), dtype=COORD_DTYPE)
    vtx2xyz[0] = [0.0, y_min, 0.0]
    for il in range(ndiv_length + 1):
        y0 = y_min + dl * il
        for ilo in range(ndiv_circumference):
            i_vtx = il * ndiv_circumference + ilo + 1
            vtx2xyz[i_vtx] = [radius * np.cos(dr * ilo), y0, radius * np.sin(dr * ilo)]
    vtx2xyz[num_vtx - 1] = [0.0, y_min + length, 0.0]

    return cylinder_like_topology(ndiv_length, ndiv_circumference), vtx2xyz


def sphere_yup(radius: float,
               n_longitude: int,
               n_latitude: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    UV sphere around the y axis, poles at ±radius·ŷ.

    Args:
        radius: sphere radius
        n_longitude: divisions pole to pole (≥ 2)
        n_latitude: vertices per ring (≥ 3)

    Returns:
        tri2vtx, vtx2xyz with V = n_latitude * (n_longitude - 1) + 2.
        Degenerate divisions give empty arrays and a UserWarning.
    """
    if n_longitude <= 1 or n_latitude <= 2:
        warnings.warn(
            f"sphere_yup: degenerate divisions n_longitude={n_longitude}, "
            f"n_latitude={n_latitude}; returning empty mesh",
            UserWarning
        )
        return _empty()

    dl = np.pi / n_longitude
    dr = 2.0 * np.pi / n_latitude

    vtx2xyz = []
    for ila in range(n_longitude + 1):
        y0 = np.cos(dl * ila)
        r0 = np.sin(dl * ila)
        for ilo in range(n_latitude):
            vtx2xyz.append([radius * r0 * np.sin(dr * ilo),
                            radius * y0,
                            radius * r0 * np.cos(dr * ilo)])
            if ila == 0 or ila == n_longitude:
                break  # pole: single vertex

    vtx2xyz = np.array(vtx2xyz, dtype=COORD_DTYPE)
    return cylinder_like_topology(n_longitude - 2, n_latitude), vtx2xyz


def hemisphere_zup(radius: float,
                   n_longitude: int,
                   n_latitude: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Upper hemisphere (z ≥ 0), pole at +radius·ẑ, open rim at z = 0.

    Returns:
        tri2vtx, vtx2xyz with V = n_latitude * n_longitude + 1.
        Degenerate divisions give empty arrays and a UserWarning.
    """
    if n_longitude == 0 or n_latitude <= 2:
        warnings.warn(
            f"hemisphere_zup: degenerate divisions n_longitude={n_longitude}, "
            f"n_latitude={n_latitude}; returning empty mesh",
            UserWarning
        )
        return _empty()

    dl = 0.5 * np.pi / n_longitude
    dr = 2.0 * np.pi / n_latitude

    vtx2xyz = []
    for ila in range(n_longitude + 1):
        z0 = np.cos(dl * ila)
        r0 = np.sin(dl * ila)
        for ilo in range(n_latitude):
            vtx2xyz.append([radius * r0 * np.sin(dr * ilo),
                            radius * r0 * np.cos(dr * ilo),
                            radius * z0])
            if ila == 0:
                break

    tri2vtx = []
    for ilo in range(n_latitude):
        tri2vtx.extend([0, ilo % n_latitude + 1, (ilo + 1) % n_latitude + 1])
    for ilong in range(n_longitude - 1):
        for ilat in range(n_latitude):
            i1 = ilong * n_latitude + 1 + ilat % n_latitude
            i2 = ilong * n_latitude + 1 + (ilat + 1) % n_latitude
            i3 = (ilong + 1) * n_latitude + 1 + (ilat + 1) % n_latitude
            i4 = (ilong + 1) * n_latitude + 1 + ilat % n_latitude
            tri2vtx.extend([i3, i2, i1])
            tri2vtx.extend([i4, i3, i1])

    return np.array(tri2vtx, dtype=INDEX_DTYPE), np.array(vtx2xyz, dtype=COORD_DTYPE)


def torus_yup(major_radius: float,
              minor_radius: float,
              ndiv_major: int,
              ndiv_minor: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Torus in the x-y plane, tube around a circle of radius major_radius.

    Args:
        ndiv_major: divisions around the main circle (≥ 3)
        ndiv_minor: divisions around the tube (≥ 3)

    Returns:
        tri2vtx, vtx2xyz with V = ndiv_major * ndiv_minor, T = 2V
    """
    if ndiv_major < 3 or ndiv_minor < 3:
        raise ValueError(f"torus_yup needs ndiv_major, ndiv_minor ≥ 3, "
                         f"got {ndiv_major}, {ndiv_minor}")

    rlg = 2.0 * np.pi / ndiv_major
    rlt = 2.0 * np.pi / ndiv_minor

    vtx2xyz = np.zeros((ndiv_major * ndiv_minor, 3), dtype=COORD_DTYPE)
    for ilg in range(ndiv_major):
        for ilt in range(ndiv_minor):
            lt = ilt * rlt
            lg = ilg * rlg
            r0 = major_radius + minor_radius * np.cos(lt)
            vtx2xyz[ilg * ndiv_minor + ilt] = [r0 * np.sin(lg),
                                               r0 * np.cos(lg),
                                               minor_radius * np.sin(lt)]

    tri2vtx = np.zeros(ndiv_major * ndiv_minor * 6, dtype=INDEX_DTYPE)
    for ilg in range(ndiv_major):
        for ilt in range(ndiv_minor):
            iug = (ilg + 1) % ndiv_major
            iut = (ilt + 1) % ndiv_minor
            i_quad = ilg * ndiv_minor + ilt
            tri2vtx[i_quad * 6:i_quad * 6 + 6] = [
                ilg * ndiv_minor + ilt, iug * ndiv_minor + iut, iug * ndiv_minor + ilt,
                ilg * ndiv_minor + ilt, ilg * ndiv_minor + iut, iug * ndiv_minor + iut,
            ]

    return tri2vtx, vtx2xyz
