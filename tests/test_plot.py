"""Tests for Plot assembly and the save pipeline."""

from __future__ import annotations

import ast
import logging
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest

from plotgen import FigureConfig, Plot, RenderResult, Scatter, Surface
from plotgen.plot import PYTHON_ENV_VAR


@pytest.fixture
def completed():
    """A successful subprocess.run result."""
    result = MagicMock()
    result.stdout = "ok"
    result.stderr = ""
    return result


@pytest.fixture(autouse=True)
def _no_python_override(monkeypatch):
    monkeypatch.delenv(PYTHON_ENV_VAR, raising=False)


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


class TestPlotAssembly:
    """Test collecting commands into a Plot."""

    def test_add_appends_buffers_in_order(self):
        scatter = Scatter()
        scatter.draw([1.0], [2.0])
        surface = Surface()
        surface.draw_sphere([0, 0, 0], 1.0, 4, 2)
        plot = Plot()
        plot.add(scatter)
        plot.add(surface)
        assert plot.get_buffer() == scatter.get_buffer() + surface.get_buffer()

    def test_set_title(self):
        plot = Plot()
        plot.set_title("Sphere")
        assert plot.get_buffer() == "plt.title('Sphere')\n"

    def test_set_labels_2d(self):
        plot = Plot()
        plot.set_labels("x", "y")
        assert plot.get_buffer() == "plt.xlabel('x')\nplt.ylabel('y')\n"

    def test_set_labels_3d(self):
        plot = Plot()
        plot.set_labels("x", "y", "z")
        assert plot.get_buffer() == (
            "ax3d().set_xlabel('x')\nax3d().set_ylabel('y')\nax3d().set_zlabel('z')\n"
        )

    def test_set_range_3d(self):
        plot = Plot()
        plot.set_range_3d(-1.0, 6.0, -1.0, 6.0, -1.0, 6.5)
        assert plot.get_buffer() == (
            "ax3d().set_xlim3d(-1,6)\n"
            "ax3d().set_ylim3d(-1,6)\n"
            "ax3d().set_zlim3d(-1,6.5)\n"
        )

    def test_set_range_3d_keeps_all_digits(self):
        plot = Plot()
        plot.set_range_3d(0.0, 1234567.0, 1.0000001, 1.0000002, 0.0, 1.0)
        assert plot.get_buffer() == (
            "ax3d().set_xlim3d(0,1234567)\n"
            "ax3d().set_ylim3d(1.0000001,1.0000002)\n"
            "ax3d().set_zlim3d(0,1)\n"
        )

    def test_set_range_3d_invalid(self):
        plot = Plot()
        with pytest.raises(ValueError, match="zmin must be less than zmax"):
            plot.set_range_3d(-1.0, 1.0, -1.0, 1.0, 2.0, 2.0)
        assert plot.get_buffer() == ""

    def test_default_figure(self):
        assert Plot().figure == FigureConfig()


# ---------------------------------------------------------------------------
# Saving
# ---------------------------------------------------------------------------


class TestPlotSave:
    """Test Plot.save with the interpreter mocked out."""

    @patch("plotgen.plot.subprocess.run")
    def test_writes_script_and_runs_it(self, mock_run, completed, tmp_path):
        mock_run.return_value = completed
        surface = Surface()
        surface.draw_sphere([0, 0, 0], 1.0, 4, 2)
        plot = Plot()
        plot.add(surface)

        out = tmp_path / "figs" / "sphere.svg"
        result = plot.save(out)

        script_path = tmp_path / "figs" / "sphere.py"
        assert isinstance(result, RenderResult)
        assert result.figure_path == out
        assert result.script_path == script_path
        assert result.stdout == "ok"

        script = script_path.read_text()
        ast.parse(script)
        assert surface.get_buffer() in script
        assert f"plt.savefig({str(out)!r},bbox_inches='tight')" in script

        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == [sys.executable, str(script_path)]
        assert kwargs["check"] is True
        assert kwargs["capture_output"] is True

    @patch("plotgen.plot.subprocess.run")
    def test_env_var_selects_python(self, mock_run, completed, tmp_path, monkeypatch):
        mock_run.return_value = completed
        monkeypatch.setenv(PYTHON_ENV_VAR, "/opt/py/bin/python3")
        Plot().save(tmp_path / "a.png")
        assert mock_run.call_args[0][0][0] == "/opt/py/bin/python3"

    @patch("plotgen.plot.subprocess.run")
    def test_explicit_python_wins(self, mock_run, completed, tmp_path, monkeypatch):
        mock_run.return_value = completed
        monkeypatch.setenv(PYTHON_ENV_VAR, "/opt/py/bin/python3")
        Plot().save(tmp_path / "a.png", python="python3.12")
        assert mock_run.call_args[0][0][0] == "python3.12"

    @patch("plotgen.plot.subprocess.run")
    def test_script_failure(self, mock_run, tmp_path):
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ["python"], output="partial", stderr="NameError: boom"
        )
        with pytest.raises(RuntimeError, match="return code 1") as exc_info:
            Plot().save(tmp_path / "a.png")
        assert "NameError: boom" in str(exc_info.value)
        assert "partial" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, subprocess.CalledProcessError)

    @patch("plotgen.plot.subprocess.run")
    def test_missing_interpreter(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("no such file")
        with pytest.raises(RuntimeError, match="interpreter not found"):
            Plot().save(tmp_path / "a.png", python="/does/not/exist")

    @patch("plotgen.plot.subprocess.run")
    def test_unsupported_format(self, mock_run, tmp_path):
        with pytest.raises(ValueError, match="Unsupported figure format"):
            Plot().save(tmp_path / "a.bmp")
        with pytest.raises(ValueError, match="Unsupported figure format"):
            Plot().save(tmp_path / "noext")
        mock_run.assert_not_called()
        assert not list(tmp_path.iterdir())

    @patch("plotgen.plot.subprocess.run")
    def test_figure_config_in_script(self, mock_run, completed, tmp_path):
        mock_run.return_value = completed
        plot = Plot(FigureConfig.square(dpi=72, tight=False))
        plot.save(tmp_path / "a.pdf")
        script = (tmp_path / "a.py").read_text()
        assert "plt.figure(figsize=(6, 6), dpi=72)" in script
        assert "bbox_inches" not in script

    @patch("plotgen.plot.subprocess.run")
    def test_existing_script_is_overwritten_with_warning(
        self, mock_run, completed, tmp_path, caplog
    ):
        mock_run.return_value = completed
        script_path = tmp_path / "analysis.py"
        script_path.write_text("print('mine')\n")
        plot = Plot()
        plot.set_title("t")
        with caplog.at_level(logging.WARNING, logger="plotgen.plot"):
            plot.save(tmp_path / "analysis.png")
        assert "Overwriting existing script" in caplog.text
        assert "plt.title('t')" in script_path.read_text()

    @patch("plotgen.plot.subprocess.run")
    def test_new_script_logs_no_warning(self, mock_run, completed, tmp_path, caplog):
        mock_run.return_value = completed
        with caplog.at_level(logging.WARNING, logger="plotgen.plot"):
            Plot().save(tmp_path / "fresh.png")
        assert "Overwriting" not in caplog.text


class TestPlotRender:
    """End-to-end rendering with the current interpreter."""

    def test_surface_figure(self, tmp_path):
        pytest.importorskip("matplotlib")
        surface = Surface(with_wireframe=True, with_colorbar=True, colorbar_label="z")
        surface.draw_sphere([0.0, 0.0, 0.0], 1.0, 12, 6)
        surface.draw_cylinder([0.0, 0.0, 0.0], [0.0, 0.0, 2.0], 0.5, 1, 12)
        plot = Plot()
        plot.add(surface)
        plot.set_labels("x", "y", "z")
        plot.set_range_3d(-1.0, 1.0, -1.0, 1.0, -1.0, 2.0)
        result = plot.save(tmp_path / "surface.png")
        assert result.figure_path.exists()
        assert result.figure_path.stat().st_size > 0

    def test_scatter_figure(self, tmp_path):
        pytest.importorskip("matplotlib")
        scatter = Scatter(marker_style="o", marker_is_void=True, marker_size=20.0)
        scatter.draw([1.0, 2.0, 3.0], [1.0, 4.0, 9.0])
        plot = Plot()
        plot.add(scatter)
        plot.set_title("squares")
        plot.set_labels("x", "y")
        result = plot.save(tmp_path / "scatter.svg")
        assert result.figure_path.read_text().lstrip().startswith("<?xml")
