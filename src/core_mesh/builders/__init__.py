"""
Geometry builders - pure geometry construction, no operators dependency.

EXPORTS:
- Icosahedron: vertex arena + fixed connectivity, buffer extraction
- build_icosahedron_mesh: contract wrapper (returns mesh dict)
- build_icosahedron: raw geometry (returns V, E, F tuple)
- icosahedron_vertices: vertex placement only
- validate_topology_table: connectivity table check
"""

from .icosahedron import (
    Icosahedron,
    build_icosahedron,
    build_icosahedron_mesh,
    icosahedron_vertices,
    validate_topology_table,
    EDGES,
    FACES,
    FACE_EDGES,
)
