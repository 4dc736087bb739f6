"""3D surface graph maker.

Wraps the generators in ``plotgen.surface_geometry``: each ``draw_*`` method
builds the mesh, writes the commands that plot it, and returns the mesh.

Example::

    from plotgen import Plot, Surface

    surface = Surface()(with_wireframe=True, colormap_name="Pastel1")
    surface.draw_sphere([0.0, 0.0, 0.0], 1.0, 30, 15)
    plot = Plot()
    plot.add(surface)
    plot.save("/tmp/plotgen/sphere.png")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from plotgen.script import ScriptBuffer, format_number, quote
from plotgen.surface_geometry import (
    Mesh3,
    draw_cylinder,
    draw_hemisphere,
    draw_plane,
    draw_sphere,
    draw_superquadric,
)

if TYPE_CHECKING:
    from plotgen.types import ArrayLike3

logger = logging.getLogger(__name__)


class Surface(BaseModel):
    """Generates 3D surface and/or wireframe plots.

    Attributes:
        row_stride: Row step of the sampled grid; 0 = matplotlib default
        col_stride: Column step of the sampled grid; 0 = matplotlib default
        with_surface: Draw the shaded surface
        with_wireframe: Draw the wireframe on top
        with_colormap: Color the surface by z using ``colormap_name``
        colormap_name: Matplotlib colormap name
        with_colorbar: Add a colorbar (requires the colormap)
        colorbar_label: Colorbar label
        number_format_cb: Colorbar tick format, e.g. ``"%.1f"``
        surf_color: Uniform surface color when the colormap is off
        line_color: Wireframe color
        line_style: Wireframe line style
        line_width: Wireframe line width; 0 = matplotlib default
    """

    model_config = ConfigDict(validate_assignment=True)

    row_stride: int = Field(default=0, ge=0)
    col_stride: int = Field(default=0, ge=0)
    with_surface: bool = True
    with_wireframe: bool = False
    with_colormap: bool = True
    colormap_name: str = "bwr"
    with_colorbar: bool = False
    colorbar_label: str = ""
    number_format_cb: str = ""
    surf_color: str = "lightgrey"
    line_color: str = "black"
    line_style: str = ""
    line_width: float = Field(default=0.0, ge=0)

    _buffer: ScriptBuffer = PrivateAttr(default_factory=ScriptBuffer)

    def __call__(self, **kwargs: Any) -> Self:
        """Update fields in place. Returns self for chaining."""
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def draw(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> None:
        """Draw a surface from meshgrid-style coordinate matrices.

        Args:
            x: (n_rows, n_cols) x coordinates
            y: (n_rows, n_cols) y coordinates
            z: (n_rows, n_cols) z coordinates

        Raises:
            ValueError: If the matrices are not 2D with equal shapes
        """
        self.draw_mesh(
            Mesh3(
                np.array(x, dtype=float),
                np.array(y, dtype=float),
                np.array(z, dtype=float),
            )
        )

    def draw_mesh(self, mesh: Mesh3) -> None:
        """Draw a surface from a :class:`Mesh3`."""
        logger.debug("Drawing surface with shape %s", mesh.shape)
        buf = self._buffer
        sx = buf.write_matrix("x", mesh.x)
        sy = buf.write_matrix("y", mesh.y)
        sz = buf.write_matrix("z", mesh.z)
        args = f"{sx},{sy},{sz}"

        if self.with_surface:
            buf.write(f"sf=ax3d().plot_surface({args}{self.options_surface()})\n")
            if self.with_colorbar and self.with_colormap:
                buf.write(f"cb=plt.colorbar(sf{self.options_colorbar()})\n")
                if self.colorbar_label:
                    buf.write(f"cb.ax.set_ylabel({quote(self.colorbar_label)})\n")

        if self.with_wireframe:
            buf.write(f"ax3d().plot_wireframe({args}{self.options_wireframe()})\n")

    def draw_plane(
        self,
        p: ArrayLike3,
        n: ArrayLike3,
        xmin: float,
        xmax: float,
        ymin: float,
        ymax: float,
        nx: int,
        ny: int,
    ) -> Mesh3:
        """Draw a plane with a non-vertical normal; see :func:`draw_plane`."""
        mesh = draw_plane(p, n, xmin, xmax, ymin, ymax, nx, ny)
        self.draw_mesh(mesh)
        return mesh

    def draw_hemisphere(
        self,
        c: ArrayLike3,
        r: float,
        alpha_min: float,
        alpha_max: float,
        n_alpha: int,
        n_theta: int,
        cup: bool = False,
    ) -> Mesh3:
        """Draw a hemisphere; see :func:`draw_hemisphere`."""
        mesh = draw_hemisphere(c, r, alpha_min, alpha_max, n_alpha, n_theta, cup)
        self.draw_mesh(mesh)
        return mesh

    def draw_superquadric(
        self,
        c: ArrayLike3,
        r: ArrayLike3,
        k: ArrayLike3,
        alpha_min: float,
        alpha_max: float,
        theta_min: float,
        theta_max: float,
        n_alpha: int,
        n_theta: int,
    ) -> Mesh3:
        """Draw a superquadric; see :func:`draw_superquadric`."""
        mesh = draw_superquadric(
            c, r, k, alpha_min, alpha_max, theta_min, theta_max, n_alpha, n_theta
        )
        self.draw_mesh(mesh)
        return mesh

    def draw_sphere(self, c: ArrayLike3, r: float, n_alpha: int, n_theta: int) -> Mesh3:
        """Draw a sphere; see :func:`draw_sphere`."""
        mesh = draw_sphere(c, r, n_alpha, n_theta)
        self.draw_mesh(mesh)
        return mesh

    def draw_cylinder(
        self,
        a: ArrayLike3,
        b: ArrayLike3,
        radius: float,
        n_axis: int,
        n_perimeter: int,
    ) -> Mesh3:
        """Draw a cylinder between two points; see :func:`draw_cylinder`."""
        mesh = draw_cylinder(a, b, radius, n_axis, n_perimeter)
        self.draw_mesh(mesh)
        return mesh

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def _options_strides(self) -> str:
        options = ""
        if self.row_stride > 0:
            options += f",rstride={self.row_stride}"
        if self.col_stride > 0:
            options += f",cstride={self.col_stride}"
        return options

    def options_surface(self) -> str:
        """Return the keyword arguments of ``plot_surface``."""
        options = self._options_strides()
        if self.with_colormap:
            options += f",cmap={quote(self.colormap_name)}"
        else:
            options += f",color={quote(self.surf_color)}"
        return options

    def options_wireframe(self) -> str:
        """Return the keyword arguments of ``plot_wireframe``."""
        options = self._options_strides()
        if self.line_color:
            options += f",color={quote(self.line_color)}"
        if self.line_style:
            options += f",linestyle={quote(self.line_style)}"
        if self.line_width > 0.0:
            options += f",linewidth={format_number(self.line_width)}"
        return options

    def options_colorbar(self) -> str:
        """Return the keyword arguments of ``plt.colorbar``."""
        if self.number_format_cb:
            return f",format={quote(self.number_format_cb)}"
        return ""

    def get_buffer(self) -> str:
        """Return the generated commands."""
        return str(self._buffer)


__all__ = ["Surface"]
