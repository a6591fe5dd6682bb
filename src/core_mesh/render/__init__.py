"""Render-ready vertex/index buffers."""

from .buffers import (
    VERTEX_DTYPE,
    RenderBuffers,
    index_dtype,
    vertex_buffer,
    index_buffer,
    extract_buffers,
)
