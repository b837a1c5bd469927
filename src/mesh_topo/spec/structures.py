"""
Mesh Contract - THE critical piece
===================================

Every relation in mesh_topo is a CSR (compressed sparse row) pair:

    offsets : (N+1,) non-decreasing, offsets[0] == 0
    values  : (offsets[N],) member indices, group i is values[offsets[i]:offsets[i+1]]

Naming follows <from>2<to>:
    elem2idx, idx2vtx   element -> vertex   (winding order)
    vtx2jdx,  jdx2elem  vertex  -> element  (incidence)
    vtx2kdx,  kdx2vtx   vertex  -> vertex   (edge adjacency)

All operators MUST validate input through validate_elements() unless the
caller opts out with verify=False.
"""

import numpy as np
import scipy.sparse as sp
from typing import Iterator, List, Sequence, Tuple

from .constants import (
    INDEX_DTYPE, COORD_DTYPE, SUPPORTED_ARITIES,
    TRI_ARITY, QUAD_ARITY, ELEM_TRI, ELEM_QUAD, ELEM_MIX,
)


def as_index_array(a, name: str = "array") -> np.ndarray:
    """
    Coerce a sequence to a 1-D INDEX_DTYPE array.

    Raises:
        ValueError: if input is not 1-D or holds non-integer values
    """
    arr = np.asarray(a)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}")
    if arr.size == 0:
        return np.zeros(0, dtype=INDEX_DTYPE)
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"{name} must hold integers, got dtype {arr.dtype}")
    return arr.astype(INDEX_DTYPE, copy=False)


def freeze(*arrays: np.ndarray):
    """Mark arrays read-only. Returns a single array or a tuple."""
    for arr in arrays:
        arr.flags.writeable = False
    if len(arrays) == 1:
        return arrays[0]
    return arrays


def validate_csr(offsets, values, n_targets: int = None,
                 strict: bool = True, name: str = "csr") -> Tuple[bool, List[str]]:
    """
    Validate a CSR pair.

    Args:
        offsets: (N+1,) offsets
        values: member indices
        n_targets: size of the value domain (values must be < n_targets)
        strict: If True, raise on any error
        name: label used in error messages

    Returns:
        (is_valid, list of error messages)
    """
    errors = []
    offsets = np.asarray(offsets)
    values = np.asarray(values)

    if offsets.ndim != 1 or len(offsets) == 0:
        errors.append(f"{name}: offsets must be 1-D with at least one entry")
    else:
        if offsets[0] != 0:
            errors.append(f"{name}: offsets[0] = {offsets[0]}, expected 0")
        steps = np.diff(offsets)
        bad = np.where(steps < 0)[0]
        if len(bad) > 0:
            errors.append(f"{name}: offsets decrease at group {bad[0]} "
                          f"({offsets[bad[0]]} -> {offsets[bad[0] + 1]})")
        if len(values) != offsets[-1]:
            errors.append(f"{name}: len(values) = {len(values)}, "
                          f"expected offsets[-1] = {offsets[-1]}")

    if values.size > 0:
        if values.min() < 0:
            errors.append(f"{name}: negative value {values.min()}")
        if n_targets is not None and values.max() >= n_targets:
            errors.append(f"{name}: value {values.max()} out of bounds [0, {n_targets - 1}]")

    if errors and strict:
        raise ValueError(f"CSR contract violation: {errors}")

    return (len(errors) == 0, errors)


def validate_elements(elem2idx, idx2vtx, num_vtx: int = None,
                      strict: bool = True) -> Tuple[bool, List[str]]:
    """
    Validate element -> vertex connectivity.

    Checks the CSR shape, vertex index bounds and that every element is a
    triangle or a quadrilateral.

    Args:
        elem2idx: (num_elem+1,) offsets
        idx2vtx: vertex indices of all elements, concatenated
        num_vtx: total vertex count; if None only non-negativity is checked
        strict: If True, raise on first error category

    Returns:
        (is_valid, list of error messages)
    """
    ok, errors = validate_csr(elem2idx, idx2vtx, num_vtx, strict=False, name="elem2vtx")

    if ok:
        arity = np.diff(np.asarray(elem2idx))
        bad = np.where(~np.isin(arity, SUPPORTED_ARITIES))[0]
        if len(bad) > 0:
            errors.append(
                f"Element {bad[0]}: has {arity[bad[0]]} vertices, "
                f"supported arities are {SUPPORTED_ARITIES} "
                f"({len(bad)} unsupported elements)"
            )

    if errors and strict:
        raise ValueError(f"Element contract violation: {errors}")

    return (len(errors) == 0, errors)


def csr_from_uniform(elem2vtx, arity: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build (elem2idx, idx2vtx) from a fixed-stride element list.

    Args:
        elem2vtx: flat list, or (num_elem, arity) array
        arity: vertices per element

    Returns:
        elem2idx: (num_elem+1,) offsets
        idx2vtx: flat vertex indices
    """
    idx2vtx = as_index_array(np.asarray(elem2vtx).reshape(-1), "elem2vtx")
    if len(idx2vtx) % arity != 0:
        raise ValueError(f"len(elem2vtx) = {len(idx2vtx)} is not a multiple of arity {arity}")
    num_elem = len(idx2vtx) // arity
    elem2idx = np.arange(num_elem + 1, dtype=INDEX_DTYPE) * arity
    return elem2idx, idx2vtx


def csr_from_elements(elements: Sequence[Sequence[int]]) -> Tuple[np.ndarray, np.ndarray]:
    """Build (elem2idx, idx2vtx) from a list of per-element vertex lists."""
    elem2idx = np.zeros(len(elements) + 1, dtype=INDEX_DTYPE)
    elem2idx[1:] = np.cumsum([len(e) for e in elements])
    idx2vtx = np.fromiter((v for e in elements for v in e),
                          dtype=INDEX_DTYPE, count=int(elem2idx[-1]))
    return elem2idx, idx2vtx


def csr_groups(offsets, values) -> Iterator[Tuple[int, np.ndarray]]:
    """Yield (group_index, members) for every group of a CSR pair."""
    for i in range(len(offsets) - 1):
        yield i, values[offsets[i]:offsets[i + 1]]


def csr_to_sparse(offsets, values, n_cols: int) -> sp.csr_matrix:
    """
    View a CSR pair as an (N, n_cols) scipy sparse matrix with unit entries.

    Repeated members of one group are summed, so entry (i, j) counts how many
    times j appears in group i.
    """
    offsets = np.asarray(offsets)
    n_rows = len(offsets) - 1
    data = np.ones(len(values), dtype=INDEX_DTYPE)
    mat = sp.csr_matrix((data, np.asarray(values), offsets), shape=(n_rows, n_cols))
    mat.sum_duplicates()
    return mat


class MeshContract:
    """
    Documents the required fields for a mesh dict.

    Required fields:
        vtx2xyz : np.ndarray (N×ndim)
            Vertex coordinates, ndim = 2 or 3
        elem2idx : np.ndarray (num_elem+1,)
            Element offsets
        idx2vtx : np.ndarray
            Element vertex indices in winding order
        elem_type : str
            "tri", "quad" or "mix"

    Optional metadata:
        name : str
            Human-readable name

    Derived counts (added by create_mesh):
        num_vtx, num_elem, ndim
    """

    REQUIRED_FIELDS = ['vtx2xyz', 'elem2idx', 'idx2vtx', 'elem_type']
    VALID_ELEM_TYPES = [ELEM_TRI, ELEM_QUAD, ELEM_MIX]


def _elem_type_from_arity(arity: np.ndarray) -> str:
    if len(arity) > 0 and np.all(arity == TRI_ARITY):
        return ELEM_TRI
    if len(arity) > 0 and np.all(arity == QUAD_ARITY):
        return ELEM_QUAD
    return ELEM_MIX


def validate_mesh(mesh: dict, strict: bool = True) -> Tuple[bool, List[str]]:
    """
    Validate a mesh dict against the contract.

    Args:
        mesh: The mesh dict to validate
        strict: If True, raise on first error

    Returns:
        (is_valid, list of error messages)
    """
    errors = []

    for field in MeshContract.REQUIRED_FIELDS:
        if field not in mesh:
            errors.append(f"Missing required field: {field}")

    if errors and strict:
        raise ValueError(f"Mesh contract violation: {errors}")

    if 'elem_type' in mesh and mesh['elem_type'] not in MeshContract.VALID_ELEM_TYPES:
        errors.append(f"Invalid elem_type: {mesh['elem_type']}")

    if 'vtx2xyz' in mesh and np.asarray(mesh['vtx2xyz']).ndim != 2:
        errors.append(f"vtx2xyz must be (N, ndim), got shape {np.asarray(mesh['vtx2xyz']).shape}")

    if 'elem2idx' in mesh and 'idx2vtx' in mesh and 'vtx2xyz' in mesh:
        num_vtx = len(mesh['vtx2xyz'])
        _, elem_errors = validate_elements(mesh['elem2idx'], mesh['idx2vtx'],
                                           num_vtx, strict=False)
        errors.extend(elem_errors)

        # Check consistency
        if not elem_errors and 'elem_type' in mesh:
            actual = _elem_type_from_arity(np.diff(mesh['elem2idx']))
            if mesh['elem_type'] != actual and mesh['elem_type'] != ELEM_MIX:
                errors.append(f"Inconsistent: elem_type={mesh['elem_type']} "
                              f"but elements are {actual}")

    if errors and strict:
        raise ValueError(f"Mesh contract violation: {errors}")

    return (len(errors) == 0, errors)


def create_mesh(vtx2xyz, elem2idx, idx2vtx,
                name: str = "unnamed",
                elem_type: str = None) -> dict:
    """
    Helper to create a contract-compliant mesh dict.

    Args:
        vtx2xyz: (N, ndim) vertex coordinates
        elem2idx: element offsets
        idx2vtx: element vertex indices
        name: Human-readable name
        elem_type: "tri", "quad" or "mix"; inferred from arities if None

    Returns:
        Contract-compliant mesh dict
    """
    vtx2xyz = np.asarray(vtx2xyz, dtype=COORD_DTYPE)
    elem2idx = as_index_array(elem2idx, "elem2idx")
    idx2vtx = as_index_array(idx2vtx, "idx2vtx")

    if elem_type is None:
        elem_type = _elem_type_from_arity(np.diff(elem2idx))
    if elem_type not in MeshContract.VALID_ELEM_TYPES:
        raise ValueError(f"Invalid elem_type: {elem_type}")

    mesh = {
        'vtx2xyz': vtx2xyz,
        'elem2idx': elem2idx,
        'idx2vtx': idx2vtx,
        'elem_type': elem_type,
        'name': name,
    }

    # Add derived counts
    mesh['num_vtx'] = len(vtx2xyz)
    mesh['num_elem'] = len(elem2idx) - 1
    mesh['ndim'] = vtx2xyz.shape[1] if vtx2xyz.ndim == 2 else 0

    # Validate
    validate_mesh(mesh, strict=True)

    return mesh
