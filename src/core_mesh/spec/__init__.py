"""Constants, errors, mesh contract and entity views."""

from .constants import (
    EPS_CLOSE,
    SPHERE_TOL,
    BUFFER_TOL,
    LAT_ANGLE,
    LONG_STEP,
    N_VERTICES,
    N_EDGES,
    N_FACES,
    VERTEX_DEGREE,
    DEFAULT_RADIUS,
    DEFAULT_TEX_COORDS,
    DEFAULT_COLOR,
    COMPLEX_SURFACE,
    FACES_PER_EDGE,
)

from .structures import (
    InvalidRadius,
    TopologyError,
    TopologyIndexOutOfRange,
    TopologyMismatch,
    MeshContract,
    validate_mesh,
    create_mesh,
    Vertex,
    Edge,
    Face,
)
