"""
Render Buffers
==============

Flatten a mesh into the two arrays an indexed triangle-list pipeline needs.

VERTEX RECORD (packed, 32 bytes):
    position    3 × float32
    tex_coords  2 × float32
    color       3 × float32

INDEX BUFFER:
    3 unsigned indices per face, face order.
    uint16 while the vertex count fits, uint32 beyond.

Both are rebuilt from the live arena on every call, never cached.
"""

import numpy as np
from typing import NamedTuple

from ..spec.constants import ATTRIBUTE_DTYPE, UINT16_MAX_VERTICES


VERTEX_DTYPE = np.dtype([
    ('position', ATTRIBUTE_DTYPE, (3,)),
    ('tex_coords', ATTRIBUTE_DTYPE, (2,)),
    ('color', ATTRIBUTE_DTYPE, (3,)),
])


class RenderBuffers(NamedTuple):
    vertices: np.ndarray
    indices: np.ndarray


def index_dtype(n_vertices: int) -> np.dtype:
    """Narrowest unsigned index type that addresses n_vertices."""
    if n_vertices < 0:
        raise ValueError(f"n_vertices must be >= 0, got {n_vertices}")
    if n_vertices <= UINT16_MAX_VERTICES:
        return np.dtype(np.uint16)
    return np.dtype(np.uint32)


def vertex_buffer(mesh) -> np.ndarray:
    """
    Per-vertex render attributes in vertex-index order.

    Args:
        mesh: Icosahedron (anything with V, tex_coords, colors arenas)

    Returns:
        (n_vertices,) structured array of VERTEX_DTYPE
    """
    n = len(mesh.V)
    buf = np.empty(n, dtype=VERTEX_DTYPE)
    buf['position'] = mesh.V
    buf['tex_coords'] = mesh.tex_coords
    buf['color'] = mesh.colors
    return buf


def index_buffer(mesh) -> np.ndarray:
    """
    Flat triangle-list indices, 3 per face, in face order.

    Returns:
        (3 * n_faces,) unsigned array, values in [0, n_vertices)
    """
    n_vertices = len(mesh.V)
    indices = np.asarray(mesh.F, dtype=np.int64).reshape(-1)

    # Table is validated at build time; this guards hand-assembled meshes
    if indices.size and (indices.min() < 0 or indices.max() >= n_vertices):
        raise IndexError(
            f"index buffer value out of range [0, {n_vertices}): "
            f"min={indices.min()}, max={indices.max()}")

    return indices.astype(index_dtype(n_vertices))


def extract_buffers(mesh) -> RenderBuffers:
    """Both buffers from the same arena state."""
    return RenderBuffers(vertex_buffer(mesh), index_buffer(mesh))
