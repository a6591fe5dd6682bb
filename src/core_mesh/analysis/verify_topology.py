"""
Topology Verification Functions
===============================

Verify structural properties of a built surface mesh using the
incidence operators (d0, d1) and scipy's convex hull.

These functions are in analysis/ layer because they depend on operators.
"""

import numpy as np
from collections import Counter
from typing import Dict
from scipy.spatial import ConvexHull

from ..operators.incidence import build_incidence_matrices, count_connected_components
from ..spec.constants import EPS_CLOSE, SPHERE_TOL


def verify_face_edges(mesh: dict) -> Dict:
    """
    Check that each face's edges join consecutive corners.

    Args:
        mesh: contract dict with 'face_edges'

    Returns:
        dict with consistent flag and list of bad face indices
    """
    E = mesh['E']
    bad = []
    for f_idx, (corners, sides) in enumerate(zip(mesh['F'], mesh['face_edges'])):
        pairs = {frozenset((corners[k], corners[(k + 1) % 3])) for k in range(3)}
        sides_pairs = {frozenset(E[e]) for e in sides}
        if pairs != sides_pairs:
            bad.append(f_idx)

    return {
        'face_edges_consistent': not bad,
        'bad_faces': bad,
    }


def verify_surface_structure(mesh: dict) -> Dict:
    """
    Verify closed, consistently wound, outward-facing triangle surface.

    CHECKS:
        χ = V - E + F                     (2 for a sphere)
        faces per edge                    (2 for a closed surface)
        Σ_f d₁[f, e] = 0 for every e      (consistent winding)
        vertex degree and faces per vertex
        normal · centroid > 0             (outward winding, star-shaped about origin)
        | |v| - radius |                  (all vertices on the sphere)
        face set == ConvexHull facets     (faces are exactly the hull)

    Args:
        mesh: contract mesh dict

    Returns:
        dict with verification results
    """
    V = np.asarray(mesh['V'], dtype=float)
    edges = mesh['E']
    faces = mesh['F']

    d0, d1 = build_incidence_matrices(V, edges, faces)

    faces_per_edge = np.sum(np.abs(d1), axis=0)
    orientation_sums = np.sum(d1, axis=0)
    degree = np.sum(np.abs(d0), axis=0)

    face_count = Counter(v for f in faces for v in f)
    faces_per_vertex = np.array([face_count.get(i, 0) for i in range(len(V))])

    tri = V[np.asarray(faces)]
    normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
    centroids = tri.mean(axis=1)
    facing = np.einsum('ij,ij->i', normals, centroids)

    result = {
        'V': len(V),
        'E': len(edges),
        'F': len(faces),
        'chi': len(V) - len(edges) + len(faces),
        'min_faces_per_edge': int(faces_per_edge.min()),
        'max_faces_per_edge': int(faces_per_edge.max()),
        'orientation_consistent': bool(np.all(np.abs(orientation_sums) < EPS_CLOSE)),
        'min_vertex_degree': int(degree.min()),
        'max_vertex_degree': int(degree.max()),
        'min_faces_per_vertex': int(faces_per_vertex.min()),
        'max_faces_per_vertex': int(faces_per_vertex.max()),
        'n_components': count_connected_components(d0),
        'outward_normals': bool(np.all(facing > 0)),
    }

    radius = mesh.get('radius')
    if radius is not None:
        deviation = np.abs(np.linalg.norm(V, axis=1) - radius)
        result['max_radius_deviation'] = float(deviation.max())
        result['on_sphere'] = bool(deviation.max() <= SPHERE_TOL * radius)

    hull = ConvexHull(V)
    hull_faces = {frozenset(s) for s in hull.simplices}
    mesh_faces = {frozenset(f) for f in faces}
    result['hull_faces_match'] = hull_faces == mesh_faces

    if 'face_edges' in mesh:
        result.update(verify_face_edges(mesh))

    return result
