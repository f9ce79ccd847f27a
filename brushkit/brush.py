"""Brush definitions, convex hull math and mesh generation."""

from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from itertools import combinations

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

_EPSILON = sys.float_info.epsilon
_CONTAINS_MARGIN = 0.000001

_ZERO3: Vec3 = (0.0, 0.0, 0.0)
_X: Vec3 = (1.0, 0.0, 0.0)
_Y: Vec3 = (0.0, 1.0, 0.0)


def _vec3(v: Iterable[float]) -> Vec3:
    x, y, z = v
    return (float(x), float(y), float(z))


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _neg(a: Vec3) -> Vec3:
    return (-a[0], -a[1], -a[2])


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize(a: Vec3) -> Vec3:
    length = math.sqrt(_dot(a, a))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return (a[0] / length, a[1] / length, a[2] / length)


def _almost_eq(a: Vec3, b: Vec3, margin: float) -> bool:
    return all(abs(x - y) <= margin for x, y in zip(a, b))


def _zero_to_one(v: Vec2) -> Vec2:
    return tuple(1.0 if c == 0.0 else c for c in v)  # type: ignore[return-value]


@dataclass(frozen=True)
class BrushPlane:
    """An infinite plane in 3d space; the normal points out of the hull it bounds."""

    normal: Vec3 = _ZERO3
    distance: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", _vec3(self.normal))
        object.__setattr__(self, "distance", float(self.distance))

    @classmethod
    def from_triangle(cls, tri: Sequence[Vec3]) -> BrushPlane:
        """Build a plane from a triangle; vertex order decides the facing."""
        a, b, c = (_vec3(p) for p in tri)
        normal = _normalize(_cross(_sub(c, a), _sub(b, a)))
        return cls(normal=normal, distance=-_dot(normal, a))

    def point_side(self, point: Vec3) -> float:
        """Positive in front of the plane, negative behind it, zero on it."""
        return _dot(self.normal, point) + self.distance

    def project(self, point: Vec3) -> Vec2:
        """Project ``point`` onto this plane and return its 2d position."""
        x_normal = _cross(self.normal, _Y)
        if x_normal == _ZERO3:
            x_normal = _X
        y_normal = _cross(x_normal, self.normal)
        return (_dot(x_normal, point), _dot(y_normal, point))

    @staticmethod
    def calculate_intersection_point(planes: Sequence[BrushPlane]) -> Vec3 | None:
        """Intersection of three planes, or None if they do not meet in a point."""
        p1, p2, p3 = planes
        m1 = (p1.normal[0], p2.normal[0], p3.normal[0])
        m2 = (p1.normal[1], p2.normal[1], p3.normal[1])
        m3 = (p1.normal[2], p2.normal[2], p3.normal[2])
        d = (-p1.distance, -p2.distance, -p3.distance)

        u = _cross(m2, m3)
        v = _cross(m1, d)
        denom = _dot(m1, u)
        if abs(denom) < _EPSILON:
            return None
        return (_dot(d, u) / denom, _dot(m3, v) / denom, -_dot(m2, v) / denom)

    def __neg__(self) -> BrushPlane:
        return BrushPlane(normal=_neg(self.normal), distance=-self.distance)


@dataclass
class BrushUV:
    """Texture alignment of a brush face."""

    offset: Vec2 = (0.0, 0.0)
    rotation: float = 0.0
    scale: Vec2 = (0.0, 0.0)
    # X and Y texture-space axes, present for Valve220 maps.
    axes: tuple[Vec3, Vec3] | None = None


@dataclass
class BrushSurface:
    """A plane of a brush together with its texture and alignment."""

    plane: BrushPlane = field(default_factory=BrushPlane)
    texture: str = ""
    uv: BrushUV = field(default_factory=BrushUV)

    def inverted(self) -> BrushSurface:
        """This surface with its plane facing the opposite way."""
        return replace(self, plane=-self.plane)


class ConvexHull(ABC):
    """A convex volume bounded by half-spaces."""

    @abstractmethod
    def planes(self) -> Iterator[BrushPlane]:
        """The planes bounding the hull."""

    def contains_point(self, point: Vec3) -> bool:
        """True if ``point`` is not outside the hull."""
        return all(plane.point_side(point) < _CONTAINS_MARGIN for plane in self.planes())

    def calculate_vertices(self) -> Iterator[tuple[Vec3, tuple[int, int, int]]]:
        """Yield each corner of the hull with the indices of the three planes forming it.

        Corners where four or more planes meet are yielded more than once.
        """
        planes = list(self.planes())
        for (i1, p1), (i2, p2), (i3, p3) in combinations(enumerate(planes), 3):
            point = BrushPlane.calculate_intersection_point((p1, p2, p3))
            if point is None or not self.contains_point(point):
                continue
            yield point, (i1, i2, i3)

    def contains_plane(self, plane: BrushPlane) -> bool:
        """True if ``plane`` cuts through the hull or equals one of its planes."""
        sides = {plane.point_side(vertex) >= 0.0 for vertex, _ in self.calculate_vertices()}
        return len(sides) > 1 or any(existing == plane for existing in self.planes())

    def center(self) -> Vec3:
        """Average of the distinct corners of the hull."""
        corners = {vertex for vertex, _ in self.calculate_vertices()}
        if not corners:
            raise ValueError("hull has no vertices")
        n = len(corners)
        return (
            sum(c[0] for c in corners) / n,
            sum(c[1] for c in corners) / n,
            sum(c[2] for c in corners) / n,
        )


@dataclass
class Brush(ConvexHull):
    """A convex hull with texture data on each face."""

    surfaces: list[BrushSurface] = field(default_factory=list)

    def planes(self) -> Iterator[BrushPlane]:
        return (surface.plane for surface in self.surfaces)

    def cut(self, along: BrushSurface) -> None:
        """Cut the brush along ``along``, dropping surfaces wholly in front of it.

        A plane outside the brush leaves it invalid; check with ``contains_plane`` first
        when the data is untrusted.
        """
        vertices = list(self.calculate_vertices())
        old: list[BrushSurface | None] = list(self.surfaces)
        self.surfaces = []
        for vertex, indices in vertices:
            if along.plane.point_side(vertex) < -_EPSILON:
                for index in indices:
                    surface = old[index]
                    if surface is None:
                        continue
                    self.surfaces.append(surface)
                    old[index] = None
        self.surfaces.append(along)

    def polygonize(self) -> Iterator[BrushSurfacePolygon]:
        """Yield one polygon for each surface that touches the hull's corners."""
        vertex_map: dict[int, list[Vec3]] = {}
        for vertex, indices in self.calculate_vertices():
            for index in indices:
                vertex_map.setdefault(index, []).append(vertex)
        return (
            BrushSurfacePolygon(self.surfaces[index], vertices)
            for index, vertices in vertex_map.items()
        )


class BrushSurfacePolygon:
    """A polygonal face computed from a surface, with triangle indices."""

    VERTEX_PRECISION_MARGIN = 0.0001

    def __init__(self, surface: BrushSurface, vertices: Iterable[Vec3]) -> None:
        self.surface = surface
        verts = [_vec3(v) for v in vertices]
        indices: list[int] = []
        margin = self.VERTEX_PRECISION_MARGIN

        if len(verts) > 2:
            while len(verts) > 1 and _almost_eq(verts[0], verts[1], margin):
                del verts[1]

            if len(verts) > 1:
                vert_0, vert_1 = verts[0], verts[1]
                starting = _sub(vert_1, vert_0)
                normal = surface.plane.normal

                def angle(vertex: Vec3) -> float:
                    if vertex == vert_1:
                        return 0.0
                    if _almost_eq(vertex, vert_0, margin):
                        return -math.inf
                    offset = _sub(vertex, vert_0)
                    return math.atan2(_dot(_cross(offset, starting), normal), _dot(starting, offset))

                ordered = [vert_0, *sorted(verts[1:], key=angle)]
                verts = []
                for vertex in ordered:
                    if verts and _almost_eq(vertex, verts[-1], margin):
                        continue
                    verts.append(vertex)

            for i in range(1, len(verts) - 1):
                indices.extend((0, i + 1, i))

        self._vertices = verts
        self._indices = indices

    @property
    def vertices(self) -> list[Vec3]:
        return self._vertices

    @property
    def indices(self) -> list[int]:
        return self._indices

    def __repr__(self) -> str:
        return f"BrushSurfacePolygon(texture={self.surface.texture!r}, vertices={self._vertices!r})"


@dataclass
class BrushMesh:
    """Triangle-list mesh data."""

    positions: list[Vec3] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)
    uvs: list[Vec2] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


def _polygon_uv(polygon: BrushSurfacePolygon, vertex: Vec3, scale: float, texture_size: Vec2) -> Vec2:
    uv_info = polygon.surface.uv
    if uv_info.axes is not None:
        x_axis, y_axis = uv_info.axes
        u, v = _dot(x_axis, vertex), _dot(y_axis, vertex)
        u *= scale * scale / texture_size[0]
        v *= scale * scale / texture_size[1]
    else:
        u, v = polygon.surface.plane.project(vertex)

    sx, sy = _zero_to_one(uv_info.scale)
    u /= sx
    v /= sy
    u += uv_info.offset[0] / texture_size[0]
    v += uv_info.offset[1] / texture_size[1]

    if uv_info.axes is None:
        angle = math.radians(uv_info.rotation)
        cos, sin = math.cos(angle), math.sin(angle)
        u, v = cos * u - sin * v, sin * u + cos * v
    return (u, v)


def generate_mesh_from_brush_polygons(
    polygons: Sequence[BrushSurfacePolygon], scale: float, texture_size: tuple[int, int]
) -> BrushMesh:
    """Combine polygons that share one material of ``texture_size`` into a mesh."""
    size: Vec2 = (float(texture_size[0]), float(texture_size[1]))
    mesh = BrushMesh()
    for polygon in polygons:
        base = len(mesh.positions)
        mesh.indices.extend(base + i for i in polygon.indices)
        mesh.positions.extend(polygon.vertices)
        mesh.normals.extend([polygon.surface.plane.normal] * len(polygon.vertices))
        mesh.uvs.extend(_polygon_uv(polygon, v, scale, size) for v in polygon.vertices)
    return mesh