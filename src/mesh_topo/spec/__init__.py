"""Mesh contract: constants and CSR structure helpers."""

from .constants import *
from .structures import (
    as_index_array,
    freeze,
    validate_csr,
    validate_elements,
    csr_from_uniform,
    csr_from_elements,
    csr_groups,
    csr_to_sparse,
    create_mesh,
    validate_mesh,
    MeshContract,
)
