"""
Analysis functions - depend on operators layer.

Separated from builders to maintain clean layering:
    builders → spec
    analysis → operators → spec
"""

from .verify_topology import verify_surface_structure, verify_face_edges
