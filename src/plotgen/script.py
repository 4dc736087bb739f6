"""Plotting script generation.

Graph makers append numpy/matplotlib statements to a :class:`ScriptBuffer`;
:func:`generate_script` wraps the collected statements into a self-contained
Python script that renders and saves one figure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from plotgen.models import FigureConfig

_SCRIPT_TEMPLATE = '''\
#!/usr/bin/env python3
"""Auto-generated plotting script."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np


def ax3d():
    """Return the 3D axes of the current figure, creating them if needed."""
    fig = plt.gcf()
    for ax in fig.axes:
        if ax.name == "3d":
            return ax
    return fig.add_subplot(projection="3d")


plt.figure(figsize=(%%WIDTH%%, %%HEIGHT%%), dpi=%%DPI%%)

%%BODY%%
plt.savefig(%%OUTPUT%%%%SAVE_OPTIONS%%)
'''


def format_number(value: float) -> str:
    """Format a number for an option string (``3.0 -> "3"``, ``0.7 -> "0.7"``).

    Uses the shortest text that round-trips, so no digits are lost.
    """
    return repr(float(value)).removesuffix(".0")


def _format_item(value: float) -> str:
    # non-finite values are spelled through the np namespace
    if np.isnan(value):
        return "np.nan"
    if np.isinf(value):
        return "np.inf" if value > 0 else "-np.inf"
    return f"{value:.15f}"


def quote(text: str | Path) -> str:
    """Return a Python string literal for ``text``."""
    return repr(str(text))


class ScriptBuffer:
    """Append-only buffer of generated plotting statements.

    Variable names are made unique by suffixing the current buffer length,
    so arrays written by the same graph never collide.
    """

    def __init__(self) -> None:
        self._text = ""

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def write(self, text: str) -> None:
        """Append raw text."""
        self._text += text

    def generate_uid(self, key: str) -> str:
        """Return ``key`` suffixed with the current buffer length."""
        return f"{key}_{len(self._text)}"

    def write_array(self, name: str, values: Iterable[float]) -> str:
        """Write a 1D float array and return its variable name."""
        uid = self.generate_uid(name)
        items = "".join(f"{_format_item(float(v))}," for v in values)
        self.write(f"{uid}=np.array([{items}],dtype=float)\n")
        return uid

    def write_arrays(
        self,
        name_x: str,
        name_y: str,
        array_x: Iterable[float],
        array_y: Iterable[float],
    ) -> tuple[str, str]:
        """Write two 1D arrays and return both variable names."""
        uid_x = self.write_array(name_x, array_x)
        uid_y = self.write_array(name_y, array_y)
        return uid_x, uid_y

    def write_matrix(self, name: str, values: np.ndarray) -> str:
        """Write a 2D float array and return its variable name."""
        matrix = np.asarray(values, dtype=float)
        if matrix.ndim != 2:
            raise ValueError(f"Expected a 2D array, got ndim={matrix.ndim}")
        uid = self.generate_uid(name)
        rows = "".join(
            "[" + "".join(f"{_format_item(v)}," for v in row) + "],"
            for row in matrix.tolist()
        )
        self.write(f"{uid}=np.array([{rows}],dtype=float)\n")
        return uid


def generate_script(body: str, output_path: str | Path, figure: FigureConfig) -> str:
    """Generate the script that renders ``body`` and saves the figure.

    Args:
        body: Plotting statements collected from graph makers.
        output_path: Path of the image file the script writes.
        figure: Figure size, resolution and save options.

    Returns:
        Python script as a string
    """
    save_options = ",bbox_inches='tight'" if figure.tight else ""
    return (
        _SCRIPT_TEMPLATE.replace("%%WIDTH%%", format_number(figure.width))
        .replace("%%HEIGHT%%", format_number(figure.height))
        .replace("%%DPI%%", str(figure.dpi))
        .replace("%%OUTPUT%%", quote(output_path))
        .replace("%%SAVE_OPTIONS%%", save_options)
        .replace("%%BODY%%", body)
    )


__all__ = ["ScriptBuffer", "format_number", "generate_script", "quote"]
