"""
Global constants for core_mesh
==============================

All tolerances, magic numbers and render defaults in ONE place.
"""

import numpy as np

# Numerical tolerances
EPS_CLOSE = 1e-10      # For "are these equal?" (exact combinatorics, integer-derived)
SPHERE_TOL = 1e-9      # Relative tolerance for |v| == radius (float64 arena)
BUFFER_TOL = 1e-6      # Relative tolerance once positions are cast to float32

# Regular icosahedron angles (architectural, not configurable)
LAT_ANGLE = float(np.arctan(0.5))   # latitude of both rings, ≈ 26.565°
LONG_STEP = float(np.radians(36.0)) # half the azimuth spacing within a ring

# Base icosahedron cardinalities
N_VERTICES = 12
N_EDGES = 30
N_FACES = 20
VERTEX_DEGREE = 5      # every vertex touches 5 edges and 5 faces

# Vertex index layout
NORTH_POLE = 0
SOUTH_POLE = 11
UPPER_RING = (1, 2, 3, 4, 5)
LOWER_RING = (6, 7, 8, 9, 10)

# Construction defaults
DEFAULT_RADIUS = 1.0

# Arena / buffer dtypes
POSITION_DTYPE = np.float64   # arena precision
ATTRIBUTE_DTYPE = np.float32  # render buffer precision
UINT16_MAX_VERTICES = 65535   # above this, index buffers switch to uint32

# Per-vertex attribute defaults
DEFAULT_TEX_COORDS = (0.0, 0.0)
DEFAULT_COLOR = (1.0, 1.0, 1.0)   # opaque white

# Complex type (closed 2-manifold, 2 faces/edge)
COMPLEX_SURFACE = "surface"
FACES_PER_EDGE = {
    COMPLEX_SURFACE: 2,
}

# =============================================================================
# WINDING CONVENTION
# =============================================================================
#
# Faces list their corners counter-clockwise when seen from OUTSIDE the mesh,
# so n = (c1 - c0) × (c2 - c0) points away from the origin.
#
# Face edges are listed along that winding: (c0c1, c1c2, c2c0).
#
# For a consistently oriented closed surface, every edge is traversed once
# in each direction by its two faces, so every column of d₁ sums to zero.
#
