"""SVG transform lists as 2D affine matrices.

A matrix is the SVG 6-tuple (a, b, c, d, e, f):
    x' = a*x + c*y + e
    y' = b*x + d*y + f
"""

import math
import re
from typing import Tuple

from shapely import affinity

Matrix = Tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

_TRANSFORM_RE = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def multiply(m1: Matrix, m2: Matrix) -> Matrix:
    """m1 x m2: apply m2 first, then m1."""
    a1, b1, c1, d1, e1, f1 = m1
    a2, b2, c2, d2, e2, f2 = m2
    return (
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


def parse_transform(text: str) -> Matrix:
    """Parse a transform attribute. Unknown or malformed entries are ignored."""
    result = IDENTITY
    if not text:
        return result
    for name, args in _TRANSFORM_RE.findall(text):
        values = [float(v) for v in _NUMBER_RE.findall(args)]
        m = _to_matrix(name, values)
        if m is not None:
            result = multiply(result, m)
    return result


def _to_matrix(name: str, v: list):
    if name == "matrix" and len(v) == 6:
        return tuple(v)
    if name == "translate" and v:
        return (1.0, 0.0, 0.0, 1.0, v[0], v[1] if len(v) > 1 else 0.0)
    if name == "scale" and v:
        sx = v[0]
        sy = v[1] if len(v) > 1 else sx
        return (sx, 0.0, 0.0, sy, 0.0, 0.0)
    if name == "rotate" and v:
        rad = math.radians(v[0])
        cos_a, sin_a = math.cos(rad), math.sin(rad)
        rot = (cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)
        if len(v) >= 3:
            cx, cy = v[1], v[2]
            rot = multiply(
                multiply((1.0, 0.0, 0.0, 1.0, cx, cy), rot),
                (1.0, 0.0, 0.0, 1.0, -cx, -cy),
            )
        return rot
    if name == "skewX" and v:
        return (1.0, 0.0, math.tan(math.radians(v[0])), 1.0, 0.0, 0.0)
    if name == "skewY" and v:
        return (1.0, math.tan(math.radians(v[0])), 0.0, 1.0, 0.0, 0.0)
    return None


def apply(matrix: Matrix, geom):
    """Apply an SVG matrix to a shapely geometry."""
    if matrix == IDENTITY:
        return geom
    a, b, c, d, e, f = matrix
    # shapely order: [a, b, d, e, xoff, yoff] for x' = a*x + b*y + xoff
    return affinity.affine_transform(geom, [a, c, b, d, e, f])
