"""
Incidence Matrices
==================

Pure combinatorics - NO geometry assumptions.

DEFINITIONS:
    d₀: E × V  "gradient" - oriented edge-vertex incidence
    d₁: F × E  "curl" - oriented face-edge incidence

IDENTITIES (closed triangle surface):
    1. d₁d₀ = 0           (exactness - ALWAYS)
    2. Tr(d₀d₀ᵀ) = 2E     (each edge has 2 endpoints)
    3. Tr(d₁ᵀd₁) = 2E     (each edge bounds 2 faces)
    4. Σ_f d₁[f, e] = 0   (consistent winding: the two faces of an
                           edge traverse it in opposite directions)

REFERENCE: Discrete Exterior Calculus (Desbrun et al., 2005)
"""

import numpy as np
from collections import deque
from typing import List, Tuple


def build_d0(vertices: np.ndarray,
             edges: List[Tuple[int, int]]) -> np.ndarray:
    """
    Build gradient operator d₀: C⁰ → C¹.

    DEFINITION:
        d₀[e, v] = -1 if v is the source of edge e
        d₀[e, v] = +1 if v is the target of edge e
        d₀[e, v] = 0 otherwise

    Convention: for edge (i, j) with i < j, i is source, j is target.

    Args:
        vertices: (V, 3) array (only used for V count)
        edges: list of E tuples (i, j)

    Returns:
        d0: (E, V) dense incidence matrix
    """
    V = len(vertices)
    E = len(edges)
    d0 = np.zeros((E, V))

    for e_idx, (i, j) in enumerate(edges):
        d0[e_idx, i] = -1  # source
        d0[e_idx, j] = +1  # target

    return d0


def build_d1(vertices: np.ndarray,
             edges: List[Tuple[int, int]],
             faces: List[List[int]]) -> np.ndarray:
    """
    Build curl operator d₁: C¹ → C².

    DEFINITION:
        d₁[f, e] = +1 if face f walks edge e from source to target
        d₁[f, e] = -1 if it walks e backwards
        d₁[f, e] = 0 if e is not on the boundary of f

    Args:
        vertices: (V, 3) array
        edges: list of E tuples (i, j)
        faces: list of F corner cycles

    Returns:
        d1: (F, E) incidence matrix

    FAIL-FAST:
        Raises ValueError if any face segment is not in edge list,
        or a face uses the same edge twice.
    """
    E = len(edges)
    F = len(faces)

    # (i,j) -> (edge_index, sign)
    edge_dict = {}
    for e_idx, (i, j) in enumerate(edges):
        edge_dict[(i, j)] = (e_idx, +1)
        edge_dict[(j, i)] = (e_idx, -1)

    d1 = np.zeros((F, E))

    for f_idx, face in enumerate(faces):
        n = len(face)
        for k in range(n):
            v1 = face[k]
            v2 = face[(k + 1) % n]
            if (v1, v2) not in edge_dict:
                raise ValueError(f"Face {f_idx} uses segment ({v1},{v2}) which is not in edge list. "
                                 f"Face vertices: {list(face)}")
            e_idx, sign = edge_dict[(v1, v2)]
            if d1[f_idx, e_idx] != 0:
                raise ValueError(f"Face {f_idx} uses edge {e_idx} twice. "
                                 f"Face vertices: {list(face)}")
            d1[f_idx, e_idx] += sign

    return d1


def build_incidence_matrices(vertices: np.ndarray,
                             edges: List[Tuple[int, int]],
                             faces: List[List[int]]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build both incidence matrices d₀ and d₁.

    EXACTNESS THEOREM:
        d₁ d₀ = 0

    Each vertex of a face appears in exactly 2 consecutive edges of the
    face boundary, with opposite signs.

    Returns:
        d0: (E, V) gradient matrix
        d1: (F, E) curl matrix
    """
    d0 = build_d0(vertices, edges)
    d1 = build_d1(vertices, edges, faces)

    d1d0 = d1 @ d0
    if not np.allclose(d1d0, 0):
        raise ValueError(f"Exactness failed: ||d₁d₀|| = {np.linalg.norm(d1d0)}")

    return d0, d1


def count_connected_components(d0: np.ndarray) -> int:
    """
    Count connected components of graph via BFS on d₀.

    Args:
        d0: (E, V) gradient matrix

    Returns:
        c: number of connected components (1 for any polyhedron)
    """
    E, V = d0.shape

    adj = [[] for _ in range(V)]
    for e in range(E):
        verts = np.where(d0[e, :] != 0)[0]
        if len(verts) == 2:
            i, j = verts
            adj[i].append(j)
            adj[j].append(i)

    visited = [False] * V
    components = 0

    for start in range(V):
        if visited[start]:
            continue
        queue = deque([start])
        visited[start] = True
        while queue:
            v = queue.popleft()
            for neighbor in adj[v]:
                if not visited[neighbor]:
                    visited[neighbor] = True
                    queue.append(neighbor)
        components += 1

    return components


def build_operators_from_mesh(mesh: dict) -> dict:
    """
    Build d₀, d₁ and their traces from a contract mesh dict.

    Returns:
        dict with d0, d1, traces{Tr_d0d0t, Tr_d1td1}, n_components
    """
    d0, d1 = build_incidence_matrices(mesh['V'], mesh['E'], mesh['F'])

    return {
        'd0': d0,
        'd1': d1,
        'traces': {
            'Tr_d0d0t': float(np.trace(d0 @ d0.T)),
            'Tr_d1td1': float(np.trace(d1.T @ d1)),
        },
        'n_components': count_connected_components(d0),
    }
