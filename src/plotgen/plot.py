"""Figure assembly and rendering.

``Plot`` collects the commands of one or more graph makers, writes them into
a standalone Python script next to the requested image, and runs that script
with an external interpreter that has matplotlib installed.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from plotgen.models import FigureConfig
from plotgen.script import ScriptBuffer, format_number, generate_script, quote

if TYPE_CHECKING:
    from plotgen.types import GraphMaker

logger = logging.getLogger(__name__)

# Environment variable selecting the interpreter that renders the figure
PYTHON_ENV_VAR = "PLOTGEN_PYTHON"

SUPPORTED_FORMATS = ("eps", "jpg", "pdf", "png", "svg")


@dataclass
class RenderResult:
    """Result of rendering a figure.

    Attributes:
        figure_path: Image written by the script.
        script_path: Generated Python script.
        stdout: Captured standard output of the interpreter.
        stderr: Captured standard error of the interpreter.
    """

    figure_path: Path
    script_path: Path
    stdout: str = ""
    stderr: str = ""


class Plot:
    """Collects graphs and figure settings, then renders them to a file.

    Example:
        >>> from plotgen import Plot, Surface
        >>>
        >>> surface = Surface()
        >>> surface.draw_sphere([0.0, 0.0, 0.0], 1.0, 30, 15)
        >>> plot = Plot()
        >>> plot.add(surface)
        >>> plot.set_range_3d(-1.0, 1.0, -1.0, 1.0, -1.0, 1.0)
        >>> result = plot.save("/tmp/plotgen/sphere.svg")
    """

    def __init__(self, figure: FigureConfig | None = None) -> None:
        self.figure = figure if figure is not None else FigureConfig()
        self._buffer = ScriptBuffer()

    def get_buffer(self) -> str:
        """Return all commands collected so far."""
        return str(self._buffer)

    def add(self, graph: GraphMaker) -> None:
        """Append the commands of a graph maker (Scatter, Surface, ...)."""
        self._buffer.write(graph.get_buffer())

    # -------------------------------------------------------------------------
    # Figure settings
    # -------------------------------------------------------------------------

    def set_title(self, title: str) -> None:
        """Set the figure title."""
        self._buffer.write(f"plt.title({quote(title)})\n")

    def set_labels(self, xlabel: str, ylabel: str, zlabel: str | None = None) -> None:
        """Set axis labels.

        Args:
            xlabel: Label of the x axis
            ylabel: Label of the y axis
            zlabel: Label of the z axis; implies 3D axes
        """
        if zlabel is None:
            self._buffer.write(
                f"plt.xlabel({quote(xlabel)})\nplt.ylabel({quote(ylabel)})\n"
            )
            return
        self._buffer.write(
            f"ax3d().set_xlabel({quote(xlabel)})\n"
            f"ax3d().set_ylabel({quote(ylabel)})\n"
            f"ax3d().set_zlabel({quote(zlabel)})\n"
        )

    def set_range_3d(
        self,
        xmin: float,
        xmax: float,
        ymin: float,
        ymax: float,
        zmin: float,
        zmax: float,
    ) -> None:
        """Set the limits of the 3D axes.

        Raises:
            ValueError: If a lower limit is not below its upper limit
        """
        limits = (("x", xmin, xmax), ("y", ymin, ymax), ("z", zmin, zmax))
        for axis, lo, hi in limits:
            if not lo < hi:
                raise ValueError(
                    f"{axis}min must be less than {axis}max, got {lo} and {hi}"
                )
        for axis, lo, hi in limits:
            self._buffer.write(
                f"ax3d().set_{axis}lim3d({format_number(lo)},{format_number(hi)})\n"
            )

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def save(self, path: str | Path, *, python: str | None = None) -> RenderResult:
        """Write the plotting script and run it to produce the figure.

        The script is written next to the figure with a ``.py`` suffix. An
        existing file at that path is overwritten, with a warning logged.

        Args:
            path: Output image path; the suffix selects the format
            python: Interpreter used to run the script. Defaults to the
                ``PLOTGEN_PYTHON`` environment variable, then the current
                interpreter.

        Returns:
            RenderResult with the figure and script paths and captured output

        Raises:
            ValueError: If the file format is not supported
            RuntimeError: If the interpreter is missing or the script fails
        """
        figure_path = Path(path)
        fmt = figure_path.suffix.lstrip(".").lower()
        if fmt not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported figure format {figure_path.suffix!r}. "
                f"Use one of: {', '.join(SUPPORTED_FORMATS)}"
            )

        if python is None:
            python = os.environ.get(PYTHON_ENV_VAR) or sys.executable

        figure_path.parent.mkdir(parents=True, exist_ok=True)
        script_path = figure_path.with_suffix(".py")
        if script_path.exists():
            logger.warning("Overwriting existing script %s", script_path)
        script_path.write_text(
            generate_script(self.get_buffer(), figure_path.absolute(), self.figure)
        )
        logger.info("Plotting script written to %s", script_path)

        cmd = [python, str(script_path)]
        logger.info("Command: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            error_msg = f"Plotting script failed with return code {e.returncode}"
            if e.stdout:
                error_msg += f"\n\nStdout:\n{e.stdout}"
            if e.stderr:
                error_msg += f"\n\nStderr:\n{e.stderr}"
            raise RuntimeError(error_msg) from e
        except FileNotFoundError as e:
            raise RuntimeError(
                f"Python interpreter not found: {python}. "
                f"Set {PYTHON_ENV_VAR} or pass python=..."
            ) from e

        logger.info("Figure saved to %s", figure_path)
        return RenderResult(
            figure_path=figure_path,
            script_path=script_path,
            stdout=result.stdout,
            stderr=result.stderr,
        )


__all__ = ["PYTHON_ENV_VAR", "SUPPORTED_FORMATS", "Plot", "RenderResult"]
