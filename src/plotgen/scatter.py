"""Scatter plot graph maker.

Example::

    from plotgen import Plot, Scatter

    scatter = Scatter(marker_style="*", color="#4c4deb")
    scatter.draw([1.0, 2.0, 3.0], [1.0, 4.0, 9.0])
    plot = Plot()
    plot.add(scatter)
    plot.save("/tmp/plotgen/scatter.svg")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from plotgen.script import ScriptBuffer, format_number, quote

if TYPE_CHECKING:
    from collections.abc import Sequence


class Scatter(BaseModel):
    """Generates a 2D scatter plot from two arrays (x, y).

    Empty strings and zero values mean "use the matplotlib default" and are
    left out of the generated command.
    """

    model_config = ConfigDict(validate_assignment=True)

    alpha: float = Field(default=0.0, ge=0, le=1, description="Opacity; 0 = default")
    color: str = Field(default="", description="Marker color")
    marker_style: str = Field(default="", description='Marker type, e.g. "o", "+"')
    marker_size: float = Field(
        default=0.0, ge=0, description="Marker size in points^2; 0 = default"
    )
    marker_is_void: bool = Field(default=False, description="Draw marker edges only")
    marker_line_color: str = Field(default="", description="Marker edge color")
    marker_line_width: float = Field(
        default=0.0, ge=0, description="Marker edge width; 0 = default"
    )

    _buffer: ScriptBuffer = PrivateAttr(default_factory=ScriptBuffer)

    def __call__(self, **kwargs: Any) -> Self:
        """Update fields in place. Returns self for chaining."""
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self

    def draw(self, x: Sequence[float], y: Sequence[float]) -> None:
        """Draw a scatter graph.

        Args:
            x: Abscissa values
            y: Ordinate values

        Raises:
            ValueError: If x and y differ in length
        """
        if len(x) != len(y):
            raise ValueError(
                f"x and y must have the same length, got {len(x)} and {len(y)}"
            )
        sx, sy = self._buffer.write_arrays("x", "y", x, y)
        self._buffer.write(f"plt.scatter({sx},{sy}{self.options()})\n")

    def options(self) -> str:
        """Return the keyword arguments of the scatter command."""
        # void markers need a visible edge
        edge_color = self.marker_line_color
        if self.marker_is_void and not edge_color:
            edge_color = "red"

        options = ""
        if self.alpha > 0.0:
            options += f",alpha={format_number(self.alpha)}"
        if self.color:
            options += f",color={quote(self.color)}"
        if self.marker_style:
            options += f",marker={quote(self.marker_style)}"
        if self.marker_size > 0.0:
            options += f",s={format_number(self.marker_size)}"
        if self.marker_is_void:
            options += ",facecolors='none'"
        if edge_color:
            options += f",edgecolors={quote(edge_color)}"
        if self.marker_line_width > 0.0:
            options += f",linewidths={format_number(self.marker_line_width)}"
        return options

    def get_buffer(self) -> str:
        """Return the generated commands."""
        return str(self._buffer)


__all__ = ["Scatter"]
