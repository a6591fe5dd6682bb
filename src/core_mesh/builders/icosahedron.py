"""
Icosahedron Geometry
====================

Construction of the regular icosahedron, the base mesh of an icosphere.

CONSTRUCTION:
    Two poles on the z axis plus two rings of 5 vertices at latitude
    ±atan(1/2). The upper ring sits at azimuths 0°, 72°, ..., 288°;
    the lower ring is rotated by 36° so every lower vertex sits between
    two upper ones.

    Index layout:
        0       north pole
        1..5    upper ring
        6..10   lower ring
        11      south pole

CONNECTIVITY:
    Fixed table (data, not control flow), checked once at import.

OUTPUTS:
    V = 12 vertices
    E = 30 edges
    F = 20 faces (triangles)
    χ = V - E + F = 12 - 30 + 20 = 2
"""

import numbers
import warnings

import numpy as np
from typing import List, Tuple

from ..spec.constants import (
    LAT_ANGLE, LONG_STEP, N_VERTICES,
    NORTH_POLE, SOUTH_POLE, UPPER_RING, LOWER_RING,
    DEFAULT_RADIUS, DEFAULT_TEX_COORDS, DEFAULT_COLOR,
    POSITION_DTYPE, ATTRIBUTE_DTYPE, COMPLEX_SURFACE,
)
from ..spec.structures import (
    InvalidRadius, TopologyIndexOutOfRange, TopologyMismatch,
    Vertex, Edge, Face, create_mesh,
)


# =============================================================================
# Connectivity table
# =============================================================================

# 30 edges, (i, j) with i < j
EDGES: Tuple[Tuple[int, int], ...] = (
    # north: pole to upper ring
    (0, 1), (0, 2), (0, 3), (0, 4), (0, 5),                 # 0-4
    # upper ring (cyclic)
    (1, 2), (2, 3), (3, 4), (4, 5), (1, 5),                 # 5-9
    # zigzag belt
    (1, 6), (1, 7), (2, 7), (2, 8), (3, 8),                 # 10-14
    (3, 9), (4, 9), (4, 10), (5, 10), (5, 6),               # 15-19
    # lower ring (cyclic)
    (6, 7), (7, 8), (8, 9), (9, 10), (6, 10),               # 20-24
    # south: lower ring to pole
    (6, 11), (7, 11), (8, 11), (9, 11), (10, 11),           # 25-29
)

# 20 faces, corners CCW seen from outside
FACES: Tuple[Tuple[int, int, int], ...] = (
    # north cap
    (0, 1, 2), (0, 2, 3), (0, 3, 4), (0, 4, 5), (0, 5, 1),  # 0-4
    # belt: (lower, lower, upper) then (upper, lower, upper), around the equator
    (6, 7, 1), (1, 7, 2),                                   # 5-6
    (7, 8, 2), (2, 8, 3),                                   # 7-8
    (8, 9, 3), (3, 9, 4),                                   # 9-10
    (9, 10, 4), (4, 10, 5),                                 # 11-12
    (10, 6, 5), (5, 6, 1),                                  # 13-14
    # south cap
    (11, 7, 6), (11, 8, 7), (11, 9, 8), (11, 10, 9), (11, 6, 10),  # 15-19
)

# Edges of each face along its winding: (c0c1, c1c2, c2c0)
FACE_EDGES: Tuple[Tuple[int, int, int], ...] = (
    (0, 5, 1), (1, 6, 2), (2, 7, 3), (3, 8, 4), (4, 9, 0),
    (20, 11, 10), (11, 12, 5),
    (21, 13, 12), (13, 14, 6),
    (22, 15, 14), (15, 16, 7),
    (23, 17, 16), (17, 18, 8),
    (24, 19, 18), (19, 10, 9),
    (26, 20, 25), (27, 21, 26), (28, 22, 27), (29, 23, 28), (25, 24, 29),
)


def validate_topology_table(edges, faces, face_edges, n_vertices: int) -> None:
    """
    Check a connectivity table for internal consistency.

    FAIL-FAST:
        TopologyIndexOutOfRange if an edge or face names a vertex outside
        [0, n_vertices), or a face names an edge outside [0, len(edges)).
        TopologyMismatch if a face has repeated corners, the wrong number
        of edges, or an edge whose endpoints are not the matching corner pair.
    """
    n_edges = len(edges)

    for e_idx, (i, j) in enumerate(edges):
        if not (0 <= i < n_vertices and 0 <= j < n_vertices):
            raise TopologyIndexOutOfRange(
                f"Edge {e_idx}: ({i},{j}) has vertex index out of range [0, {n_vertices})")

    if len(faces) != len(face_edges):
        raise TopologyMismatch(
            f"{len(faces)} faces but {len(face_edges)} face edge triples")

    for f_idx, (corners, sides) in enumerate(zip(faces, face_edges)):
        if any(not (0 <= v < n_vertices) for v in corners):
            raise TopologyIndexOutOfRange(
                f"Face {f_idx}: corners {tuple(corners)} out of range [0, {n_vertices})")
        if any(not (0 <= e < n_edges) for e in sides):
            raise TopologyIndexOutOfRange(
                f"Face {f_idx}: edges {tuple(sides)} out of range [0, {n_edges})")
        if len(corners) != 3 or len(set(corners)) != 3:
            raise TopologyMismatch(f"Face {f_idx}: corners {tuple(corners)} are not 3 distinct vertices")
        if len(sides) != 3:
            raise TopologyMismatch(f"Face {f_idx}: expected 3 edges, got {len(sides)}")

        for k in range(3):
            expected = frozenset((corners[k], corners[(k + 1) % 3]))
            actual = frozenset(edges[sides[k]])
            if actual != expected:
                raise TopologyMismatch(
                    f"Face {f_idx}: edge {sides[k]} {tuple(edges[sides[k]])} "
                    f"does not join corners {corners[k]} and {corners[(k + 1) % 3]}")


# Checked once, at import
validate_topology_table(EDGES, FACES, FACE_EDGES, N_VERTICES)


# =============================================================================
# Vertex placement
# =============================================================================

def _check_radius(radius) -> float:
    if isinstance(radius, bool) or not isinstance(radius, numbers.Real):
        raise InvalidRadius(f"radius must be a real number, got {radius!r}")
    r = float(radius)
    if not np.isfinite(r) or r <= 0:
        raise InvalidRadius(f"radius must be finite and > 0, got {radius!r}")
    if r < float(np.finfo(ATTRIBUTE_DTYPE).tiny):
        raise InvalidRadius(
            f"radius={r:g} underflows float32; vertex buffers would collapse to the origin")
    if r > float(np.finfo(ATTRIBUTE_DTYPE).max):
        warnings.warn(
            f"radius={r:g} exceeds float32 range; vertex buffers will contain inf.",
            UserWarning
        )
    return r


def icosahedron_vertices(radius: float = DEFAULT_RADIUS) -> np.ndarray:
    """
    Place the 12 icosahedron vertices on the sphere of given radius.

    CONSTRUCTION:
        ring height = radius·sin(atan(1/2))
        ring radius = radius·cos(atan(1/2))
        upper ring k = 0..4 at azimuth 2k·36°
        lower ring k = 0..4 at azimuth (2k-1)·36°, height negated

    Args:
        radius: circumscribed sphere radius, finite and > 0

    Returns:
        vertices: (12, 3) float64 array

    Raises:
        InvalidRadius: radius <= 0, below float32 range, NaN, inf, or not a number

    Example:
        >>> v = icosahedron_vertices(5.0)
        >>> v[0]
        array([0., 0., 5.])
    """
    r = _check_radius(radius)

    ring_height = r * np.sin(LAT_ANGLE)
    ring_radius = r * np.cos(LAT_ANGLE)

    vertices = np.zeros((N_VERTICES, 3), dtype=POSITION_DTYPE)
    vertices[NORTH_POLE] = (0.0, 0.0, r)
    vertices[SOUTH_POLE] = (0.0, 0.0, -r)

    k = np.arange(5)
    upper = k * 2 * LONG_STEP
    lower = (k * 2 - 1) * LONG_STEP

    up = list(UPPER_RING)
    vertices[up, 0] = ring_radius * np.cos(upper)
    vertices[up, 1] = ring_radius * np.sin(upper)
    vertices[up, 2] = ring_height

    lo = list(LOWER_RING)
    vertices[lo, 0] = ring_radius * np.cos(lower)
    vertices[lo, 1] = ring_radius * np.sin(lower)
    vertices[lo, 2] = -ring_height

    return vertices


# =============================================================================
# Mesh
# =============================================================================

def _check_index(kind: str, i, n: int) -> None:
    if isinstance(i, bool) or not isinstance(i, numbers.Integral):
        raise TypeError(f"{kind} index must be an integer, got {i!r}")
    if not 0 <= i < n:
        raise IndexError(f"{kind} index {i} out of range [0, {n})")


class Icosahedron:
    """
    Regular icosahedron: vertex arena plus fixed connectivity.

    ARENA:
        V          (12, 3) positions, mutable in place
        tex_coords (12, 2) defaults (0, 0)
        colors     (12, 3) defaults opaque white

    TOPOLOGY (immutable tuples):
        E          30 edges (i, j), i < j
        F          20 corner triples, outward winding
        face_edges 20 edge triples along the winding

    Construction is atomic: an invalid radius raises before any
    attribute is set.
    """

    def __init__(self, radius: float = DEFAULT_RADIUS):
        vertices = icosahedron_vertices(radius)

        self.radius = float(radius)
        self.V = vertices
        self.tex_coords = np.tile(np.asarray(DEFAULT_TEX_COORDS, dtype=POSITION_DTYPE), (N_VERTICES, 1))
        self.colors = np.tile(np.asarray(DEFAULT_COLOR, dtype=POSITION_DTYPE), (N_VERTICES, 1))
        self.E = EDGES
        self.F = FACES
        self.face_edges = FACE_EDGES

    # --- counts ---------------------------------------------------------

    @property
    def n_vertices(self) -> int:
        return len(self.V)

    @property
    def n_edges(self) -> int:
        return len(self.E)

    @property
    def n_faces(self) -> int:
        return len(self.F)

    # --- views ----------------------------------------------------------

    def vertex(self, i: int) -> Vertex:
        _check_index("vertex", i, self.n_vertices)
        return Vertex(self, i)

    def edge(self, e: int) -> Edge:
        _check_index("edge", e, self.n_edges)
        return Edge(self, e)

    def face(self, f: int) -> Face:
        _check_index("face", f, self.n_faces)
        return Face(self, f)

    @property
    def vertices(self) -> List[Vertex]:
        return [Vertex(self, i) for i in range(self.n_vertices)]

    @property
    def edges(self) -> List[Edge]:
        return [Edge(self, e) for e in range(self.n_edges)]

    @property
    def faces(self) -> List[Face]:
        return [Face(self, f) for f in range(self.n_faces)]

    def faces_of_vertex(self, i: int) -> List[Face]:
        """Faces having vertex i as a corner."""
        _check_index("vertex", i, self.n_vertices)
        return [Face(self, f_idx) for f_idx, corners in enumerate(self.F) if i in corners]

    def edges_of_vertex(self, i: int) -> List[Edge]:
        """Edges having vertex i as an endpoint."""
        _check_index("vertex", i, self.n_vertices)
        return [Edge(self, e_idx) for e_idx, pair in enumerate(self.E) if i in pair]

    # --- mutation -------------------------------------------------------

    def set_position(self, i: int, xyz) -> None:
        """
        Move vertex i in place.

        Every edge and face referencing i sees the new position, since
        they all read the same arena row.
        """
        _check_index("vertex", i, self.n_vertices)
        p = np.asarray(xyz, dtype=POSITION_DTYPE)
        if p.shape != (3,):
            raise ValueError(f"position must have shape (3,), got {p.shape}")
        if not np.all(np.isfinite(p)):
            raise ValueError(f"position must be finite, got {tuple(p)}")
        self.V[i] = p

    # --- extraction -----------------------------------------------------

    def vertex_buffer(self) -> np.ndarray:
        from ..render.buffers import vertex_buffer
        return vertex_buffer(self)

    def index_buffer(self) -> np.ndarray:
        from ..render.buffers import index_buffer
        return index_buffer(self)

    def to_mesh(self, name: str = "icosahedron") -> dict:
        """Contract mesh dict sharing this mesh's live position array."""
        return create_mesh(self.V, self.E, self.F,
                           complex_type=COMPLEX_SURFACE,
                           name=name,
                           radius=self.radius,
                           face_edges=self.face_edges)

    def __repr__(self):
        return (f"Icosahedron(radius={self.radius:g}, V={self.n_vertices}, "
                f"E={self.n_edges}, F={self.n_faces})")


def build_icosahedron(radius: float = DEFAULT_RADIUS) -> Tuple[np.ndarray, List[Tuple[int, int]], List[List[int]]]:
    """
    Raw geometry of the icosahedron.

    Returns:
        vertices: (12, 3) array
        edges: list of 30 edge tuples
        faces: list of 20 triangles (outward winding)
    """
    vertices = icosahedron_vertices(radius)
    edges = list(EDGES)
    faces = [list(f) for f in FACES]

    return vertices, edges, faces


def build_icosahedron_mesh(radius: float = DEFAULT_RADIUS) -> dict:
    """Contract-compliant mesh dict for the icosahedron."""
    return Icosahedron(radius).to_mesh()


# Self-test
if __name__ == "__main__":
    ico = Icosahedron(5.0)
    print("=" * 60)
    print("ICOSAHEDRON CONSTRUCTION")
    print("=" * 60)
    print(f"  {ico}")
    print(f"  χ = {ico.n_vertices} - {ico.n_edges} + {ico.n_faces} = "
          f"{ico.n_vertices - ico.n_edges + ico.n_faces}")
    norms = np.linalg.norm(ico.V, axis=1)
    print(f"  |v| range: [{norms.min():.12f}, {norms.max():.12f}]")
    for v in ico.vertices:
        print(f"  {v}")
