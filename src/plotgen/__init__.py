"""plotgen - matplotlib script generation for scatter plots and 3D surfaces.

Graph makers write numpy/matplotlib statements; ``Plot`` assembles them into
a script and runs an external Python interpreter to save the figure.

Currently includes:
    - surface_geometry: parametric mesh generators (plane, hemisphere,
      superquadric, sphere, cylinder)
    - Scatter / Surface: graph makers
    - Plot: figure assembly and rendering
"""

from __future__ import annotations

from plotgen.models import FigureConfig
from plotgen.plot import Plot, RenderResult
from plotgen.scatter import Scatter
from plotgen.surface import Surface
from plotgen.surface_geometry import (
    InvalidInput,
    Mesh3,
    draw_cylinder,
    draw_hemisphere,
    draw_plane,
    draw_sphere,
    draw_superquadric,
    generate3d,
    signed_pow,
)

__version__ = "0.1.0"

__all__ = [
    "FigureConfig",
    "InvalidInput",
    "Mesh3",
    "Plot",
    "RenderResult",
    "Scatter",
    "Surface",
    "__version__",
    "draw_cylinder",
    "draw_hemisphere",
    "draw_plane",
    "draw_sphere",
    "draw_superquadric",
    "generate3d",
    "signed_pow",
]
