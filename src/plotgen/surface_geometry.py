"""Parametric surface generators.

Pure functions that sample 3D shapes on a structured grid and return the
coordinates as a :class:`Mesh3` (three equal-shape 2D arrays, as in a
meshgrid). Nothing here touches matplotlib; the graph makers in
``plotgen.surface`` turn a mesh into plotting commands.

Functions:
    generate3d: Evaluate ``z = f(x, y)`` over a rectangular grid.
    draw_plane: Plane with a non-vertical normal.
    draw_hemisphere: Dome or cup over a range of azimuths.
    draw_superquadric: Superquadric (sphere, super-ellipsoid, star shapes).
    draw_sphere: Full sphere.
    draw_cylinder: Circular cylinder between two points.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from plotgen.types import ArrayLike3

logger = logging.getLogger(__name__)

# Smallest |n.z| accepted by draw_plane and smallest cylinder axis length
ZERO_TOL = 1e-10


class InvalidInput(ValueError):
    """Raised when geometric input violates a generator's contract."""


# ---------------------------------------------------------------------------
# Mesh container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Mesh3:
    """Sampled surface as three equal-shape 2D grids.

    The stored grids are read-only views, so the arrays passed in stay
    writable for the caller.

    Attributes:
        x: (n_rows, n_cols) x coordinates.
        y: (n_rows, n_cols) y coordinates.
        z: (n_rows, n_cols) z coordinates.
    """

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray

    def __post_init__(self) -> None:
        if self.x.ndim != 2:
            raise ValueError(f"Mesh grids must be 2D, got ndim={self.x.ndim}")
        if not (self.x.shape == self.y.shape == self.z.shape):
            raise ValueError(
                "Mesh grids must have equal shapes, got "
                f"{self.x.shape}, {self.y.shape}, {self.z.shape}"
            )
        for name in ("x", "y", "z"):
            view = getattr(self, name).view()
            view.setflags(write=False)
            object.__setattr__(self, name, view)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.x, self.y, self.z))

    @property
    def shape(self) -> tuple[int, int]:
        """Grid dimensions ``(n_rows, n_cols)``."""
        return self.x.shape

    def points(self) -> np.ndarray:
        """Return all sampled points as an (N, 3) array in row-major order."""
        return np.column_stack([self.x.ravel(), self.y.ravel(), self.z.ravel()])


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _as_vector3(name: str, value: ArrayLike3) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise InvalidInput(f"{name} must have length 3, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInput(f"{name} must be finite, got {arr.tolist()}")
    return arr


def _as_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be finite, got {value}")
    return value


def _check_divisions(**counts: int) -> None:
    for name, count in counts.items():
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise InvalidInput(f"{name} must be an integer, got {count!r}")
        if count < 1:
            raise InvalidInput(f"{name} must be greater than or equal to 1")


# ---------------------------------------------------------------------------
# Kernels
# ---------------------------------------------------------------------------


def signed_pow(value, exponent):
    """Raise ``|value|`` to ``exponent`` keeping the sign of ``value``.

    Works element-wise on arrays; used by the superquadric map, whose
    exponents are usually fractional.
    """
    return np.sign(value) * np.abs(value) ** exponent


def _superquadric_grid(
    c: np.ndarray,
    r: np.ndarray,
    exponents: np.ndarray,
    alpha: np.ndarray,
    theta: np.ndarray,
) -> Mesh3:
    """Evaluate the superquadric map on angles given in radians.

    Rows follow ``alpha`` (longitude), columns follow ``theta`` (latitude).
    """
    aa, bb, cc = exponents
    a, t = np.meshgrid(alpha, theta, indexing="ij")
    cos_a, sin_a = np.cos(a), np.sin(a)
    cos_t, sin_t = np.cos(t), np.sin(t)
    x = c[0] + r[0] * signed_pow(cos_t, aa) * signed_pow(cos_a, aa)
    y = c[1] + r[1] * signed_pow(cos_t, bb) * signed_pow(sin_a, bb)
    z = c[2] + r[2] * signed_pow(sin_t, cc)
    return Mesh3(x, y, z)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


def generate3d(
    xmin: float,
    xmax: float,
    ymin: float,
    ymax: float,
    nx: int,
    ny: int,
    f: Callable[[np.ndarray, np.ndarray], np.ndarray],
) -> Mesh3:
    """Evaluate ``z = f(x, y)`` on a rectangular grid.

    Args:
        xmin: Lower x limit.
        xmax: Upper x limit.
        ymin: Lower y limit.
        ymax: Upper y limit.
        nx: Number of points along x (rows).
        ny: Number of points along y (columns).
        f: Vectorized function of the x and y grids.

    Returns:
        Mesh3 with shape ``(nx, ny)``.

    Raises:
        InvalidInput: If a limit is not finite or a point count is below 1.
    """
    _check_divisions(nx=nx, ny=ny)
    xs = np.linspace(_as_finite("xmin", xmin), _as_finite("xmax", xmax), nx)
    ys = np.linspace(_as_finite("ymin", ymin), _as_finite("ymax", ymax), ny)
    x, y = np.meshgrid(xs, ys, indexing="ij")
    z = np.broadcast_to(np.asarray(f(x, y), dtype=float), x.shape).copy()
    return Mesh3(x, y, z)


def draw_plane(
    p: ArrayLike3,
    n: ArrayLike3,
    xmin: float,
    xmax: float,
    ymin: float,
    ymax: float,
    nx: int,
    ny: int,
) -> Mesh3:
    """Sample a plane whose normal has a non-zero z component.

    The plane is solved for z, so it cannot be parallel to the z axis.
    ``n = (0, 0, 1)`` gives a horizontal plane.

    Args:
        p: (len=3) point on the plane.
        n: (len=3) normal vector.
        xmin: Lower x limit.
        xmax: Upper x limit.
        ymin: Lower y limit.
        ymax: Upper y limit.
        nx: Number of divisions along x.
        ny: Number of divisions along y.

    Returns:
        Mesh3 with shape ``(nx + 1, ny + 1)``.

    Raises:
        InvalidInput: On wrong vector lengths, ``|n.z| < 1e-10`` or
            a division count below 1.
    """
    p = _as_vector3("p", p)
    n = _as_vector3("n", n)
    if abs(n[2]) < ZERO_TOL:
        raise InvalidInput("the z-component of the normal vector cannot be zero")
    _check_divisions(nx=nx, ny=ny)

    d = -float(np.dot(n, p))

    def plane_z(x, y):
        return (-d - n[0] * x - n[1] * y) / n[2]

    mesh = generate3d(xmin, xmax, ymin, ymax, nx + 1, ny + 1, plane_z)
    logger.debug("Generated plane mesh with shape %s", mesh.shape)
    return mesh


def draw_hemisphere(
    c: ArrayLike3,
    r: float,
    alpha_min: float,
    alpha_max: float,
    n_alpha: int,
    n_theta: int,
    cup: bool = False,
) -> Mesh3:
    """Sample a hemisphere.

    The polar angle always covers ``[0, 90]`` degrees; only the azimuth
    range is configurable.

    Args:
        c: (len=3) center coordinates.
        r: Radius (not checked; must be positive for a meaningful shape).
        alpha_min: Min azimuth in [-180, 180) degrees.
        alpha_max: Max azimuth in (-180, 180] degrees.
        n_alpha: Number of divisions along the azimuth.
        n_theta: Number of divisions along the polar angle.
        cup: Upside-down, below the center like a cup, instead of a dome.

    Returns:
        Mesh3 with shape ``(n_alpha + 1, n_theta + 1)``.

    Raises:
        InvalidInput: On wrong vector length or a division count below 1.
    """
    c = _as_vector3("c", c)
    r = _as_finite("r", r)
    _check_divisions(n_alpha=n_alpha, n_theta=n_theta)

    alpha = np.radians(
        np.linspace(
            _as_finite("alpha_min", alpha_min),
            _as_finite("alpha_max", alpha_max),
            n_alpha + 1,
        )
    )
    polar = np.linspace(0.0, np.pi / 2, n_theta + 1)
    # Polar angle measured from the pole -> latitude
    latitude = np.pi / 2 - polar
    if cup:
        latitude = -latitude

    mesh = _superquadric_grid(c, np.full(3, r), np.ones(3), alpha, latitude)
    logger.debug("Generated hemisphere mesh (cup=%s) with shape %s", cup, mesh.shape)
    return mesh


def draw_superquadric(
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
    """Sample a superquadric (sphere, super-ellipsoid, super-hyperboloid).

    Reference: https://en.wikipedia.org/wiki/Superquadrics

    Args:
        c: (len=3) center coordinates.
        r: (len=3) radii.
        k: (len=3) exponents; ``k = (2, 2, 2)`` is an ellipsoid.
        alpha_min: Min longitude in [-180, 180) degrees.
        alpha_max: Max longitude in (-180, 180] degrees.
        theta_min: Min latitude in [-90, 90) degrees.
        theta_max: Max latitude in (-90, 90] degrees.
        n_alpha: Number of divisions along the longitude.
        n_theta: Number of divisions along the latitude.

    Returns:
        Mesh3 with shape ``(n_alpha + 1, n_theta + 1)``.

    Raises:
        InvalidInput: On wrong vector lengths, a division count below 1 or
            a negative exponent.
    """
    c = _as_vector3("c", c)
    r = _as_vector3("r", r)
    k = _as_vector3("k", k)
    _check_divisions(n_alpha=n_alpha, n_theta=n_theta)
    if np.any(k < 0.0):
        raise InvalidInput(f"exponents k must not be negative, got {k.tolist()}")

    # k = 0 maps to an infinite exponent
    with np.errstate(divide="ignore"):
        exponents = 2.0 / k

    alpha = np.radians(
        np.linspace(
            _as_finite("alpha_min", alpha_min),
            _as_finite("alpha_max", alpha_max),
            n_alpha + 1,
        )
    )
    theta = np.radians(
        np.linspace(
            _as_finite("theta_min", theta_min),
            _as_finite("theta_max", theta_max),
            n_theta + 1,
        )
    )
    mesh = _superquadric_grid(c, r, exponents, alpha, theta)
    logger.debug(
        "Generated superquadric mesh k=%s with shape %s", k.tolist(), mesh.shape
    )
    return mesh


def draw_sphere(c: ArrayLike3, r: float, n_alpha: int, n_theta: int) -> Mesh3:
    """Sample a full sphere.

    Args:
        c: (len=3) center coordinates.
        r: Radius.
        n_alpha: Number of divisions along the longitude.
        n_theta: Number of divisions along the latitude.

    Returns:
        Mesh3 with shape ``(n_alpha + 1, n_theta + 1)``.
    """
    r = _as_finite("r", r)
    return draw_superquadric(
        c, [r, r, r], [2.0, 2.0, 2.0], -180.0, 180.0, -90.0, 90.0, n_alpha, n_theta
    )


def draw_cylinder(
    a: ArrayLike3,
    b: ArrayLike3,
    radius: float,
    n_axis: int,
    n_perimeter: int,
) -> Mesh3:
    """Sample the lateral surface of a circular cylinder.

    Args:
        a: (len=3) center of the first cap.
        b: (len=3) center of the second cap.
        radius: Cylinder radius.
        n_axis: Number of divisions along the axis.
        n_perimeter: Number of divisions around the perimeter.

    Returns:
        Mesh3 with shape ``(n_axis + 1, n_perimeter + 1)``; rows run from
        ``a`` to ``b``, columns sweep a full turn.

    Raises:
        InvalidInput: On wrong vector lengths, coincident end points,
            a non-positive radius or a division count below 1.
    """
    a = _as_vector3("a", a)
    b = _as_vector3("b", b)
    radius = _as_finite("radius", radius)
    _check_divisions(n_axis=n_axis, n_perimeter=n_perimeter)
    if radius <= 0.0:
        raise InvalidInput(f"radius must be positive, got {radius}")

    axis = b - a
    length = float(np.linalg.norm(axis))
    if length < ZERO_TOL:
        raise InvalidInput("a and b must be distinct points")
    u = axis / length

    # Seed with the coordinate axis least aligned with u
    seed = np.zeros(3)
    seed[int(np.argmin(np.abs(u)))] = 1.0
    e1 = np.cross(u, seed)
    e1 /= np.linalg.norm(e1)
    e2 = np.cross(u, e1)

    t = np.linspace(0.0, 1.0, n_axis + 1)
    phi = np.linspace(0.0, 2.0 * np.pi, n_perimeter + 1)
    tt, pp = np.meshgrid(t, phi, indexing="ij")
    cos_p, sin_p = np.cos(pp), np.sin(pp)

    x, y, z = (
        a[i] + tt * axis[i] + radius * (cos_p * e1[i] + sin_p * e2[i])
        for i in range(3)
    )
    mesh = Mesh3(x, y, z)
    logger.debug("Generated cylinder mesh with shape %s", mesh.shape)
    return mesh


__all__ = [
    "InvalidInput",
    "Mesh3",
    "draw_cylinder",
    "draw_hemisphere",
    "draw_plane",
    "draw_sphere",
    "draw_superquadric",
    "generate3d",
    "signed_pow",
]
