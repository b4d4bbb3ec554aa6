"""
SVG path data parser.

Turns a path "d" attribute into flattened subpaths: lists of (x, y)
points in the path's own user space. Bezier curves and elliptical arcs are
sampled into straight segments, which is all the length and bounding-box
measurements downstream need.

Supports the full command set (M L H V C S Q T A Z, absolute and relative),
implicit command repetition and the compact number syntax produced by
most editors ("M10-5.5.5", arc flags written without separators).
"""

import math
import re
from dataclasses import dataclass, field
from typing import List, Tuple

Point = Tuple[float, float]

CURVE_SEGMENTS = 32        # samples per bezier segment
ARC_SEGMENTS_PER_TURN = 64  # samples per full 2*pi of arc sweep

_COMMANDS = set("MmZzLlHhVvCcSsQqTtAa")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_SEPARATORS = " \t\r\n,"

# Number of arguments consumed by each command
_ARG_COUNTS = {
    "M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0,
}


class PathDataError(ValueError):
    """Malformed path data."""


@dataclass
class Subpath:
    points: List[Point] = field(default_factory=list)
    closed: bool = False


class _Scanner:
    """Cursor over a path data string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def skip_separators(self):
        while self.pos < len(self.text) and self.text[self.pos] in _SEPARATORS:
            self.pos += 1

    def at_end(self) -> bool:
        self.skip_separators()
        return self.pos >= len(self.text)

    def peek_command(self):
        self.skip_separators()
        if self.pos < len(self.text) and self.text[self.pos] in _COMMANDS:
            return self.text[self.pos]
        return None

    def next_command(self) -> str:
        cmd = self.peek_command()
        if cmd is None:
            raise PathDataError(f"Expected a path command at position {self.pos}")
        self.pos += 1
        return cmd

    def at_number(self) -> bool:
        self.skip_separators()
        return bool(_NUMBER_RE.match(self.text, self.pos))

    def number(self) -> float:
        self.skip_separators()
        m = _NUMBER_RE.match(self.text, self.pos)
        if not m:
            raise PathDataError(f"Expected a number at position {self.pos}")
        self.pos = m.end()
        return float(m.group())

    def flag(self) -> bool:
        # Arc flags are single characters and may be packed: "a1 1 0 011 1"
        self.skip_separators()
        if self.pos < len(self.text) and self.text[self.pos] in "01":
            value = self.text[self.pos] == "1"
            self.pos += 1
            return value
        raise PathDataError(f"Expected an arc flag at position {self.pos}")


def parse_path_data(d: str) -> List[Subpath]:
    """Parse a path "d" string into flattened subpaths.

    Raises PathDataError on malformed data. An empty string yields no
    subpaths.
    """
    scanner = _Scanner(d or "")
    subpaths: List[Subpath] = []
    current: Subpath = None
    x = y = 0.0
    start_x = start_y = 0.0
    # Reflection points for smooth curve commands
    last_ctrl = None
    last_cmd = None

    if scanner.at_end():
        return subpaths

    cmd = scanner.next_command()
    if cmd not in "Mm":
        raise PathDataError("Path data must begin with a moveto command")

    while True:
        upper = cmd.upper()
        relative = cmd.islower()
        first = True

        while True:
            if upper == "Z":
                if current is not None and current.points:
                    current.closed = True
                    x, y = start_x, start_y
                current = None
                last_ctrl = None
                last_cmd = "Z"
                break

            if not first and not scanner.at_number():
                break
            if first and _ARG_COUNTS[upper] and not scanner.at_number():
                raise PathDataError(f"Command {cmd!r} is missing its arguments")

            ox, oy = (x, y) if relative else (0.0, 0.0)

            if upper == "M":
                nx, ny = scanner.number() + ox, scanner.number() + oy
                if first:
                    current = Subpath(points=[(nx, ny)])
                    subpaths.append(current)
                    start_x, start_y = nx, ny
                else:
                    # Extra coordinate pairs after a moveto are implicit linetos
                    current.points.append((nx, ny))
                x, y = nx, ny
                last_ctrl = None
            else:
                if current is None:
                    # Drawing after closepath starts a new subpath at the old start
                    current = Subpath(points=[(x, y)])
                    subpaths.append(current)
                    start_x, start_y = x, y

                if upper == "L":
                    x, y = scanner.number() + ox, scanner.number() + oy
                    current.points.append((x, y))
                    last_ctrl = None
                elif upper == "H":
                    x = scanner.number() + ox
                    current.points.append((x, y))
                    last_ctrl = None
                elif upper == "V":
                    y = scanner.number() + oy
                    current.points.append((x, y))
                    last_ctrl = None
                elif upper in "CS":
                    if upper == "C":
                        c1 = (scanner.number() + ox, scanner.number() + oy)
                    else:
                        c1 = _reflect(last_ctrl, (x, y)) if last_cmd in ("C", "S") else (x, y)
                    c2 = (scanner.number() + ox, scanner.number() + oy)
                    end = (scanner.number() + ox, scanner.number() + oy)
                    current.points.extend(_cubic((x, y), c1, c2, end))
                    last_ctrl = c2
                    x, y = end
                elif upper in "QT":
                    if upper == "Q":
                        c = (scanner.number() + ox, scanner.number() + oy)
                    else:
                        c = _reflect(last_ctrl, (x, y)) if last_cmd in ("Q", "T") else (x, y)
                    end = (scanner.number() + ox, scanner.number() + oy)
                    current.points.extend(_quadratic((x, y), c, end))
                    last_ctrl = c
                    x, y = end
                elif upper == "A":
                    rx, ry = scanner.number(), scanner.number()
                    rotation = scanner.number()
                    large_arc = scanner.flag()
                    sweep = scanner.flag()
                    end = (scanner.number() + ox, scanner.number() + oy)
                    current.points.extend(
                        _arc((x, y), rx, ry, rotation, large_arc, sweep, end)
                    )
                    last_ctrl = None
                    x, y = end

            last_cmd = upper
            first = False

        if scanner.at_end():
            break
        cmd = scanner.next_command()

    return subpaths


def _reflect(ctrl, about: Point) -> Point:
    if ctrl is None:
        return about
    return (2 * about[0] - ctrl[0], 2 * about[1] - ctrl[1])


def _cubic(p0: Point, p1: Point, p2: Point, p3: Point) -> List[Point]:
    pts = []
    for i in range(1, CURVE_SEGMENTS + 1):
        t = i / CURVE_SEGMENTS
        mt = 1 - t
        a, b, c, d = mt ** 3, 3 * mt * mt * t, 3 * mt * t * t, t ** 3
        pts.append((
            a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0],
            a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1],
        ))
    return pts


def _quadratic(p0: Point, p1: Point, p2: Point) -> List[Point]:
    pts = []
    for i in range(1, CURVE_SEGMENTS + 1):
        t = i / CURVE_SEGMENTS
        mt = 1 - t
        a, b, c = mt * mt, 2 * mt * t, t * t
        pts.append((
            a * p0[0] + b * p1[0] + c * p2[0],
            a * p0[1] + b * p1[1] + c * p2[1],
        ))
    return pts


def _arc(start: Point, rx: float, ry: float, rotation_deg: float,
         large_arc: bool, sweep: bool, end: Point) -> List[Point]:
    """Sample an SVG elliptical arc (endpoint parameterization).

    Conversion to centre parameterization follows SVG 1.1 appendix F.6.5,
    including out-of-range radii correction.
    """
    x1, y1 = start
    x2, y2 = end
    if (x1, y1) == (x2, y2):
        return []
    rx, ry = abs(rx), abs(ry)
    if rx == 0 or ry == 0:
        return [end]

    phi = math.radians(rotation_deg % 360)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    dx, dy = (x1 - x2) / 2, (y1 - y2) / 2
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    lam = (x1p ** 2) / (rx ** 2) + (y1p ** 2) / (ry ** 2)
    if lam > 1:
        s = math.sqrt(lam)
        rx, ry = rx * s, ry * s

    num = rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p
    den = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    coef = math.sqrt(max(0.0, num / den)) if den else 0.0
    if large_arc == sweep:
        coef = -coef
    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx

    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2

    theta1 = _angle(1, 0, (x1p - cxp) / rx, (y1p - cyp) / ry)
    dtheta = _angle((x1p - cxp) / rx, (y1p - cyp) / ry,
                    (-x1p - cxp) / rx, (-y1p - cyp) / ry)
    if not sweep and dtheta > 0:
        dtheta -= 2 * math.pi
    elif sweep and dtheta < 0:
        dtheta += 2 * math.pi

    n = max(4, int(math.ceil(abs(dtheta) / (2 * math.pi) * ARC_SEGMENTS_PER_TURN)))
    pts = []
    for i in range(1, n + 1):
        theta = theta1 + dtheta * i / n
        ct, st = math.cos(theta), math.sin(theta)
        pts.append((
            cx + rx * ct * cos_phi - ry * st * sin_phi,
            cy + rx * ct * sin_phi + ry * st * cos_phi,
        ))
    # Land exactly on the requested endpoint
    pts[-1] = end
    return pts


def _angle(ux: float, uy: float, vx: float, vy: float) -> float:
    sign = -1.0 if ux * vy - uy * vx < 0 else 1.0
    dot = ux * vx + uy * vy
    norm = math.hypot(ux, uy) * math.hypot(vx, vy)
    if norm == 0:
        return 0.0
    return sign * math.acos(max(-1.0, min(1.0, dot / norm)))
