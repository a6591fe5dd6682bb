"""
CORE_MESH - Icosahedron mesh for planetgen
==========================================

NO GPU. NO windowing. NO plotting.

Structure:
    builders/   - Geometry construction (icosahedron)
    operators/  - Incidence matrices (d0, d1)
    analysis/   - Structural verification
    render/     - Vertex/index buffer extraction
    spec/       - Constants, errors and mesh contract

Layering:
    builders → spec
    analysis → operators → spec
    render   → spec
"""

from . import spec
from . import builders
from . import operators
from . import analysis
from . import render

from .builders import Icosahedron
from .spec import InvalidRadius, TopologyIndexOutOfRange
