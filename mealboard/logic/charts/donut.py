"""Annular (donut) chart geometry and its ReportLab rendering.

Geometry is computed in a y-down drawing space: bearing 0 is 12 o'clock and
angles grow clockwise, matching SVG. ``draw_donut`` flips the canvas around the
chart center so the same angles render identically on a PDF page.
"""
import math
from typing import Iterable, List, NamedTuple, Tuple

from mealboard.utilities.colors import parse_color
from mealboard.utilities.constants import DONUT_INNER_RATIO

# 12 o'clock: polar_to_cartesian subtracts 90 degrees, i.e. a math bearing of -90
START_ANGLE = 0.0


class Point(NamedTuple):
    x: float
    y: float


class Segment(NamedTuple):
    value: float
    color: str


class Wedge(NamedTuple):
    color: str
    center: Point
    outer_radius: float
    inner_radius: float
    start_angle: float
    end_angle: float
    large_arc: bool

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def outer_start(self) -> Point:
        return polar_to_cartesian(self.center.x, self.center.y, self.outer_radius, self.start_angle)

    @property
    def outer_end(self) -> Point:
        return polar_to_cartesian(self.center.x, self.center.y, self.outer_radius, self.end_angle)

    @property
    def inner_start(self) -> Point:
        return polar_to_cartesian(self.center.x, self.center.y, self.inner_radius, self.start_angle)

    @property
    def inner_end(self) -> Point:
        return polar_to_cartesian(self.center.x, self.center.y, self.inner_radius, self.end_angle)

    def to_svg_path(self) -> str:
        """Outer arc forward, radial line in, inner arc back, close."""
        ro, ri = self.outer_radius, self.inner_radius
        large = 1 if self.large_arc else 0
        if self.sweep >= 360:
            # a single SVG arc cannot start and end on the same point
            mid = self.start_angle + self.sweep / 2
            mo = polar_to_cartesian(self.center.x, self.center.y, ro, mid)
            mi = polar_to_cartesian(self.center.x, self.center.y, ri, mid)
            outer = f"A {ro} {ro} 0 0 1 {mo.x} {mo.y} A {ro} {ro} 0 0 1 {self.outer_end.x} {self.outer_end.y}"
            inner = f"A {ri} {ri} 0 0 0 {mi.x} {mi.y} A {ri} {ri} 0 0 0 {self.inner_start.x} {self.inner_start.y}"
        else:
            outer = f"A {ro} {ro} 0 {large} 1 {self.outer_end.x} {self.outer_end.y}"
            inner = f"A {ri} {ri} 0 {large} 0 {self.inner_start.x} {self.inner_start.y}"
        return " ".join([
            f"M {self.outer_start.x} {self.outer_start.y}",
            outer,
            f"L {self.inner_end.x} {self.inner_end.y}",
            inner,
            "Z",
        ])


class DonutDrawing(NamedTuple):
    center: Point
    outer_radius: float
    inner_radius: float
    wedges: Tuple[Wedge, ...]

    @property
    def is_empty(self) -> bool:
        return not self.wedges


def polar_to_cartesian(cx: float, cy: float, radius: float, angle_degrees: float) -> Point:
    radians = (angle_degrees - 90) * math.pi / 180.0
    return Point(cx + radius * math.cos(radians), cy + radius * math.sin(radians))


def render_donut(center: Tuple[float, float], outer_radius: float,
                 inner_radius_ratio: float = DONUT_INNER_RATIO,
                 segments: Iterable[Segment] = ()) -> DonutDrawing:
    """Build the wedge list for the given segments, swept clockwise from 12 o'clock.

    Segments are consumed in the order given; non-positive values are skipped.
    An all-zero input yields no wedges.
    """
    cx, cy = center
    origin = Point(cx, cy)
    inner_radius = outer_radius * inner_radius_ratio
    segments = [Segment(*s) for s in segments]
    total = sum(s.value for s in segments if s.value > 0)
    wedges: List[Wedge] = []
    if total > 0:
        angle = START_ANGLE
        for segment in segments:
            if segment.value <= 0:
                continue
            sweep = segment.value / total * 360.0
            wedges.append(Wedge(
                color=segment.color,
                center=origin,
                outer_radius=outer_radius,
                inner_radius=inner_radius,
                start_angle=angle,
                end_angle=angle + sweep,
                large_arc=sweep > 180,
            ))
            angle += sweep
    return DonutDrawing(origin, outer_radius, inner_radius, tuple(wedges))


def draw_donut(canvas, drawing: DonutDrawing, hole_color: str) -> None:
    """Paint the wedges of a DonutDrawing whose center is given in page coordinates."""
    cx, cy = drawing.center
    canvas.saveState()
    canvas.translate(cx, cy)
    canvas.scale(1, -1)
    for wedge in drawing.wedges:
        ro, ri = wedge.outer_radius, wedge.inner_radius
        color = parse_color(wedge.color)
        canvas.setFillColor(color)
        canvas.setStrokeColor(color)
        path = canvas.beginPath()
        path.moveTo(*polar_to_cartesian(0, 0, ro, wedge.start_angle))
        path.arcTo(-ro, -ro, ro, ro, startAng=wedge.start_angle - 90, extent=wedge.sweep)
        path.lineTo(*polar_to_cartesian(0, 0, ri, wedge.end_angle))
        path.arcTo(-ri, -ri, ri, ri, startAng=wedge.end_angle - 90, extent=-wedge.sweep)
        path.close()
        canvas.drawPath(path, fill=1, stroke=0)
    canvas.restoreState()

    canvas.saveState()
    canvas.setFillColor(parse_color(hole_color))
    canvas.circle(cx, cy, drawing.inner_radius, stroke=0, fill=1)
    canvas.restoreState()


__all__ = ['Point', 'Segment', 'Wedge', 'DonutDrawing', 'polar_to_cartesian', 'render_donut', 'draw_donut']
