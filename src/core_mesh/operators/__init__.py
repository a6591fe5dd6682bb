"""Incidence operators - d0, d1, connectivity."""

from .incidence import (
    build_d0,
    build_d1,
    build_incidence_matrices,
    count_connected_components,
    build_operators_from_mesh,
)
