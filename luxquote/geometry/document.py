"""
VectorDocument — a parsed SVG document with measurement primitives.

Stands in for the browser geometry APIs the storefront used to rely on
(getBBox, getTotalLength, getComputedStyle). Every drawable element is
turned into a shapely outline in root user space, i.e. with all ancestor
and own transforms applied, so measurements share the units of the root
viewBox.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Tuple

from shapely import affinity
from shapely.geometry import GeometryCollection, LineString, Point

from ..errors import InvalidDocumentError
from .path_data import PathDataError, parse_path_data
from .transforms import IDENTITY, Matrix, apply, multiply, parse_transform

logger = logging.getLogger(__name__)

Bounds = Tuple[float, float, float, float]  # min_x, min_y, max_x, max_y

DRAWABLE_TAGS = {"path", "line", "polyline", "polygon", "rect", "circle", "ellipse"}

# Containers whose children are never rendered directly
NON_RENDERED_TAGS = {
    "defs", "clipPath", "mask", "symbol", "marker", "pattern",
    "style", "script", "metadata", "title", "desc",
}

CIRCLE_QUAD_SEGMENTS = 16  # 64 segments per full circle

# SVG initial values for the painting properties we resolve
DEFAULT_FILL = "black"
DEFAULT_STROKE = "none"
DEFAULT_STROKE_WIDTH = 1.0

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def local_name(tag) -> str:
    if not isinstance(tag, str):
        return ""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _parse_number(value, default: float = 0.0) -> float:
    """Leading number of an attribute value ("12", "12.5px", "3mm")."""
    if value is None:
        return default
    m = _NUMBER_RE.search(str(value))
    if not m:
        return default
    return float(m.group())


def _parse_points(text: str) -> List[Tuple[float, float]]:
    nums = [float(n) for n in _NUMBER_RE.findall(text or "")]
    # An odd trailing coordinate is an error per SVG; drop it
    return [(nums[i], nums[i + 1]) for i in range(0, len(nums) - 1, 2)]


def _polyline(points, closed: bool = False):
    if not points:
        return None
    if len(points) == 1:
        return Point(points[0])
    if closed and points[0] != points[-1]:
        points = list(points) + [points[0]]
    return LineString(points)


def _combine(parts):
    parts = [p for p in parts if p is not None]
    if not parts:
        return GeometryCollection()
    if len(parts) == 1:
        return parts[0]
    return GeometryCollection(parts)


class VectorDocument:
    """Parsed SVG document.

    Use VectorDocument.parse() to build one from markup.
    """

    def __init__(self, root: ET.Element):
        if local_name(root.tag) != "svg":
            raise InvalidDocumentError(
                f"Invalid SVG file: root element is <{local_name(root.tag) or root.tag}>, expected <svg>"
            )
        self.root = root
        self._parents: Dict[ET.Element, ET.Element] = {
            child: parent for parent in root.iter() for child in parent
        }
        self._ctm_cache: Dict[ET.Element, Matrix] = {}
        self._geometry_cache: Dict[ET.Element, object] = {}

    @classmethod
    def parse(cls, source) -> "VectorDocument":
        """Parse SVG markup from bytes or str.

        Raises InvalidDocumentError for malformed XML or a non-svg root.
        """
        if source is None:
            raise InvalidDocumentError("Invalid SVG file: no content")
        try:
            root = ET.fromstring(source)
        except ET.ParseError as e:
            raise InvalidDocumentError(f"Invalid SVG file: {e}") from e
        logger.debug("Parsed SVG document, root viewBox=%r", root.get("viewBox"))
        return cls(root)

    # --- Document-level ---

    @property
    def viewbox(self) -> Optional[Tuple[float, float, float, float]]:
        """(min_x, min_y, width, height) from the root viewBox, or None."""
        raw = self.root.get("viewBox")
        if not raw:
            return None
        parts = _NUMBER_RE.findall(raw)
        if len(parts) != 4:
            return None
        return tuple(float(p) for p in parts)

    def drawable_elements(self) -> List[ET.Element]:
        """All rendered geometry elements, in document order."""
        found = []
        self._collect(self.root, found)
        return found

    def _collect(self, element, found: list):
        for child in element:
            tag = local_name(child.tag)
            if not tag or tag in NON_RENDERED_TAGS:
                continue
            if tag in DRAWABLE_TAGS:
                found.append(child)
            self._collect(child, found)

    def content_bounds(self, elements=None) -> Optional[Bounds]:
        """Union bounding box of drawable content, or None if there is none."""
        if elements is None:
            elements = self.drawable_elements()
        min_x = min_y = float("inf")
        max_x = max_y = float("-inf")
        for el in elements:
            box = self.bounding_box(el)
            if box is None:
                continue
            min_x, min_y = min(min_x, box[0]), min(min_y, box[1])
            max_x, max_y = max(max_x, box[2]), max(max_y, box[3])
        if min_x == float("inf"):
            return None
        return (min_x, min_y, max_x, max_y)

    # --- Per-element measurement ---

    def geometry(self, element: ET.Element):
        """Outline of an element as a shapely geometry in root user space."""
        if element not in self._geometry_cache:
            local = self._local_geometry(element)
            self._geometry_cache[element] = apply(self._ctm(element), local)
        return self._geometry_cache[element]

    def bounding_box(self, element: ET.Element) -> Optional[Bounds]:
        geom = self.geometry(element)
        if geom.is_empty:
            return None
        return tuple(geom.bounds)

    def path_length(self, element: ET.Element) -> float:
        return float(self.geometry(element).length)

    def resolved_fill(self, element: ET.Element) -> str:
        return self._resolve(element, "fill", DEFAULT_FILL)

    def resolved_stroke(self, element: ET.Element) -> str:
        return self._resolve(element, "stroke", DEFAULT_STROKE)

    def resolved_stroke_width(self, element: ET.Element) -> float:
        raw = self._resolve(element, "stroke-width", None)
        return _parse_number(raw, DEFAULT_STROKE_WIDTH)

    def is_stroked(self, element: ET.Element) -> bool:
        stroke = self.resolved_stroke(element).strip().lower()
        return stroke != "none" and self.resolved_stroke_width(element) > 0

    def is_filled(self, element: ET.Element) -> bool:
        fill = self.resolved_fill(element).strip().lower()
        return fill not in ("none", "transparent")

    # --- Internals ---

    def _style_value(self, element: ET.Element, prop: str) -> Optional[str]:
        # The style attribute wins over presentation attributes
        style = element.get("style")
        if style:
            for declaration in style.split(";"):
                name, _, value = declaration.partition(":")
                if name.strip() == prop:
                    value = value.replace("!important", "").strip()
                    if value:
                        return value
        value = element.get(prop)
        if value is not None and value.strip():
            return value.strip()
        return None

    def _resolve(self, element: ET.Element, prop: str, default):
        # fill, stroke and stroke-width are inherited properties
        node = element
        while node is not None:
            value = self._style_value(node, prop)
            if value is not None and value != "inherit":
                return value
            node = self._parents.get(node)
        return default

    def _ctm(self, element: ET.Element) -> Matrix:
        """Cumulative transform from element space to root user space."""
        if element is self.root:
            return IDENTITY
        if element in self._ctm_cache:
            return self._ctm_cache[element]
        parent = self._parents.get(element)
        parent_ctm = self._ctm(parent) if parent is not None else IDENTITY
        local = parse_transform(element.get("transform", ""))
        if local_name(element.tag) == "svg":
            # Nested viewport: honour its x/y offset
            offset = (1.0, 0.0, 0.0, 1.0,
                      _parse_number(element.get("x")), _parse_number(element.get("y")))
            local = multiply(offset, local)
        ctm = multiply(parent_ctm, local)
        self._ctm_cache[element] = ctm
        return ctm

    def _local_geometry(self, el: ET.Element):
        tag = local_name(el.tag)
        def num(name, default=0.0):
            return _parse_number(el.get(name), default)

        if tag == "path":
            try:
                subpaths = parse_path_data(el.get("d", ""))
            except PathDataError as e:
                raise InvalidDocumentError(
                    f"Invalid SVG file: bad path data{_describe(el)}: {e}"
                ) from e
            return _combine(_polyline(sp.points, sp.closed) for sp in subpaths)

        if tag == "line":
            return LineString([(num("x1"), num("y1")), (num("x2"), num("y2"))])

        if tag in ("polyline", "polygon"):
            return _combine([_polyline(_parse_points(el.get("points")), closed=tag == "polygon")])

        if tag == "rect":
            x, y, w, h = num("x"), num("y"), num("width"), num("height")
            if w <= 0 or h <= 0:
                return GeometryCollection()
            rx, ry = el.get("rx"), el.get("ry")
            if rx is None and ry is None:
                return _polyline([(x, y), (x + w, y), (x + w, y + h), (x, y + h)], closed=True)
            rx = _parse_number(rx if rx is not None else ry)
            ry = _parse_number(ry if ry is not None else rx)
            rx, ry = min(rx, w / 2), min(ry, h / 2)
            if rx <= 0 or ry <= 0:
                return _polyline([(x, y), (x + w, y), (x + w, y + h), (x, y + h)], closed=True)
            d = (
                f"M{x + rx},{y} H{x + w - rx} A{rx},{ry} 0 0 1 {x + w},{y + ry} "
                f"V{y + h - ry} A{rx},{ry} 0 0 1 {x + w - rx},{y + h} "
                f"H{x + rx} A{rx},{ry} 0 0 1 {x},{y + h - ry} "
                f"V{y + ry} A{rx},{ry} 0 0 1 {x + rx},{y} Z"
            )
            sp = parse_path_data(d)[0]
            return _polyline(sp.points, closed=True)

        if tag == "circle":
            r = num("r")
            if r <= 0:
                return GeometryCollection()
            return Point(num("cx"), num("cy")).buffer(r, quad_segs=CIRCLE_QUAD_SEGMENTS).exterior

        if tag == "ellipse":
            cx, cy = num("cx"), num("cy")
            rx, ry = num("rx"), num("ry")
            if rx <= 0 or ry <= 0:
                return GeometryCollection()
            unit = Point(cx, cy).buffer(1.0, quad_segs=CIRCLE_QUAD_SEGMENTS).exterior
            return affinity.scale(unit, xfact=rx, yfact=ry, origin=(cx, cy))

        return GeometryCollection()


def _describe(el: ET.Element) -> str:
    el_id = el.get("id")
    return f" in <{local_name(el.tag)} id={el_id!r}>" if el_id else f" in <{local_name(el.tag)}>"
