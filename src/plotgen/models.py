"""Configuration models for figure rendering.

This module contains Pydantic models for the settings that end up in the
generated plotting script.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class FigureConfig(BaseModel):
    """Figure size and save options.

    Attributes:
        width: Figure width in inches
        height: Figure height in inches
        dpi: Resolution in dots per inch
        tight: Crop whitespace around the saved figure
    """

    model_config = ConfigDict(validate_assignment=True)

    width: float = Field(default=6.4, gt=0)
    height: float = Field(default=4.8, gt=0)
    dpi: int = Field(default=100, ge=1)
    tight: bool = True

    @classmethod
    def default(cls, **kwargs: float | bool) -> Self:
        """Matplotlib's default 6.4 x 4.8 inch figure."""
        return cls(**kwargs)  # type: ignore[arg-type]

    @classmethod
    def square(cls, **kwargs: float | bool) -> Self:
        """Square 6 x 6 inch figure, suited to 3D views with equal ranges."""
        defaults: dict[str, float | int | bool] = {
            "width": 6.0,
            "height": 6.0,
        }
        defaults.update(kwargs)
        return cls(**defaults)  # type: ignore[arg-type]


__all__ = [
    "FigureConfig",
]
