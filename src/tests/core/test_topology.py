"""
Topology Tests
==============

Connectivity table, incidence identities, winding, convex hull.

Run: python -m pytest tests/core/test_topology.py -v
"""

import numpy as np
from collections import Counter

from core_mesh.builders import Icosahedron, build_icosahedron_mesh, EDGES, FACES, FACE_EDGES
from core_mesh.operators import build_operators_from_mesh, build_d1
from core_mesh.analysis import verify_surface_structure, verify_face_edges
from core_mesh.spec import EPS_CLOSE, VERTEX_DEGREE


# =============================================================================
# TEST A: Table structure
# =============================================================================

def test_edges_unique_and_ordered():
    """30 distinct edges, i < j."""
    assert len(set(EDGES)) == 30
    assert all(i < j for i, j in EDGES)


def test_edge_bands():
    """5 north, 5 upper ring, 10 zigzag, 5 lower ring, 5 south."""
    north = [e for e in EDGES if 0 in e]
    south = [e for e in EDGES if 11 in e]
    upper = [e for e in EDGES if set(e) <= {1, 2, 3, 4, 5}]
    lower = [e for e in EDGES if set(e) <= {6, 7, 8, 9, 10}]
    zigzag = [e for e in EDGES
              if len(set(e) & {1, 2, 3, 4, 5}) == 1 and len(set(e) & {6, 7, 8, 9, 10}) == 1]

    assert (len(north), len(upper), len(zigzag), len(lower), len(south)) == (5, 5, 10, 5, 5)
    assert EDGES[0:5] == tuple(north)
    assert EDGES[25:30] == tuple(south)


def test_face_edges_match_corners():
    """Each face's edges are exactly the 3 pairs of its corners."""
    for corners, sides in zip(FACES, FACE_EDGES):
        pairs = {frozenset((a, b)) for a in corners for b in corners if a != b}
        assert {frozenset(EDGES[e]) for e in sides} == pairs


def test_face_views_expose_edges():
    """Face.edges endpoints join consecutive corners."""
    ico = Icosahedron(1.0)
    for face in ico.faces:
        c = face.corners
        for k, edge in enumerate(face.edges):
            assert set(edge.endpoints) == {c[k], c[(k + 1) % 3]}


def test_each_edge_in_two_faces():
    """Every edge bounds exactly 2 faces."""
    usage = Counter(e for sides in FACE_EDGES for e in sides)
    assert sorted(usage) == list(range(30))
    assert set(usage.values()) == {2}


def test_each_vertex_in_five_faces():
    """Icosahedron vertex degree = 5."""
    usage = Counter(v for f in FACES for v in f)
    assert sorted(usage) == list(range(12))
    assert set(usage.values()) == {VERTEX_DEGREE}


def test_corners_distinct():
    assert all(len(set(f)) == 3 for f in FACES)


# =============================================================================
# TEST B: Incidence identities
# =============================================================================

def test_exactness_and_traces():
    """d₁d₀ = 0, Tr(d₀d₀ᵀ) = 2E, Tr(d₁ᵀd₁) = 2E."""
    mesh = build_icosahedron_mesh(1.0)
    ops = build_operators_from_mesh(mesh)
    E = mesh['n_E']

    assert np.allclose(ops['d1'] @ ops['d0'], 0)
    assert abs(ops['traces']['Tr_d0d0t'] - 2 * E) < EPS_CLOSE
    assert abs(ops['traces']['Tr_d1td1'] - 2 * E) < EPS_CLOSE
    assert ops['n_components'] == 1


def test_winding_consistent():
    """The two faces of each edge walk it in opposite directions."""
    mesh = build_icosahedron_mesh(1.0)
    d1 = build_d1(mesh['V'], mesh['E'], mesh['F'])
    assert np.all(np.sum(d1, axis=0) == 0)


def test_flipped_face_breaks_winding():
    """Reversing a single face is detected by d₁ column sums."""
    mesh = build_icosahedron_mesh(1.0)
    faces = [list(f) for f in mesh['F']]
    faces[7] = faces[7][::-1]
    d1 = build_d1(mesh['V'], mesh['E'], faces)
    assert np.count_nonzero(np.sum(d1, axis=0)) == 3


# =============================================================================
# TEST C: Full verification
# =============================================================================

def test_verify_surface_structure():
    """All structural checks pass for a fresh icosahedron."""
    result = verify_surface_structure(build_icosahedron_mesh(5.0))

    assert (result['V'], result['E'], result['F'], result['chi']) == (12, 30, 20, 2)
    assert result['min_faces_per_edge'] == result['max_faces_per_edge'] == 2
    assert result['orientation_consistent']
    assert result['min_vertex_degree'] == result['max_vertex_degree'] == 5
    assert result['min_faces_per_vertex'] == result['max_faces_per_vertex'] == 5
    assert result['n_components'] == 1
    assert result['outward_normals']
    assert result['on_sphere']
    assert result['hull_faces_match']
    assert result['face_edges_consistent']


def test_outward_normals_per_face():
    """normal · centroid > 0 for every Face view."""
    ico = Icosahedron(1.0)
    for face in ico.faces:
        assert np.dot(face.normal(), face.centroid()) > 0, face


def test_displaced_vertex_leaves_sphere():
    """Displacement is reported by on_sphere, topology checks still pass."""
    ico = Icosahedron(1.0)
    ico.set_position(4, ico.V[4] * 1.2)
    result = verify_surface_structure(ico.to_mesh())

    assert not result['on_sphere']
    assert abs(result['max_radius_deviation'] - 0.2) < 1e-12
    assert result['orientation_consistent']
    assert result['hull_faces_match']


def test_verify_face_edges_flags_bad_face():
    """A face pointing at the wrong edge is reported."""
    mesh = build_icosahedron_mesh(1.0)
    mesh['face_edges'][3] = (0, 1, 2)
    result = verify_face_edges(mesh)
    assert not result['face_edges_consistent']
    assert result['bad_faces'] == [3]
