"""
VectorDocument tests — parsing, per-element measurement, paint resolution.

Tests:
1-4.   Parsing and viewBox handling
5-9.   Shape outlines (rect, rounded rect, circle, ellipse, polygon)
10-12. Transforms (group translate/scale, rotate, transform lists)
13-17. Paint resolution (style vs attribute, inheritance, defaults, widths)
18-19. Non-rendered containers and content bounds
"""

import math

import pytest

from luxquote.errors import InvalidDocumentError
from luxquote.geometry import VectorDocument, parse_transform
from luxquote.geometry.transforms import IDENTITY, multiply


def _doc(svg, body, viewbox="0 0 100 100"):
    return VectorDocument.parse(svg(body, viewbox))


def _only(doc):
    elements = doc.drawable_elements()
    assert len(elements) == 1
    return elements[0]


# ============================================================
# 1-4. Parsing
# ============================================================

def test_parse_reads_viewbox(svg):
    doc = _doc(svg, "", viewbox="0 0 200 100")
    assert doc.viewbox == (0, 0, 200, 100)


def test_viewbox_accepts_commas_and_missing(svg):
    assert _doc(svg, "", viewbox="-5,-5, 10,20").viewbox == (-5, -5, 10, 20)
    assert _doc(svg, "", viewbox=None).viewbox is None
    assert _doc(svg, "", viewbox="0 0 100").viewbox is None


@pytest.mark.parametrize("markup", [
    "not xml at all",
    "<svg><rect></svg>",
    '<html xmlns="http://www.w3.org/1999/xhtml"><body/></html>',
])
def test_parse_rejects_invalid_documents(markup):
    with pytest.raises(InvalidDocumentError):
        VectorDocument.parse(markup)


def test_bad_path_data_is_an_invalid_document(svg):
    doc = _doc(svg, '<path id="p1" d="L 10 10"/>')
    with pytest.raises(InvalidDocumentError, match="p1"):
        doc.path_length(_only(doc))


# ============================================================
# 5-9. Shape outlines
# ============================================================

def test_rect_perimeter_and_bbox(svg):
    doc = _doc(svg, '<rect x="10" y="20" width="50" height="20"/>')
    rect = _only(doc)
    assert doc.path_length(rect) == pytest.approx(140)
    assert doc.bounding_box(rect) == pytest.approx((10, 20, 60, 40))


def test_rounded_rect_is_shorter_but_same_box(svg):
    doc = _doc(svg, '<rect width="40" height="20" rx="5"/>')
    rect = _only(doc)
    # Four quarter circles replace four 2*r corner runs
    expected = 2 * (40 + 20) - 8 * 5 + 2 * math.pi * 5
    assert doc.path_length(rect) == pytest.approx(expected, rel=1e-3)
    assert doc.bounding_box(rect) == pytest.approx((0, 0, 40, 20))


def test_circle_circumference(svg):
    doc = _doc(svg, '<circle cx="50" cy="50" r="10"/>')
    circle = _only(doc)
    assert doc.path_length(circle) == pytest.approx(2 * math.pi * 10, rel=1e-3)
    assert doc.bounding_box(circle) == pytest.approx((40, 40, 60, 60))


def test_ellipse_bbox(svg):
    doc = _doc(svg, '<ellipse cx="50" cy="50" rx="20" ry="10"/>')
    assert doc.bounding_box(_only(doc)) == pytest.approx((30, 40, 70, 60))


def test_polygon_closes_and_zero_size_shapes_are_empty(svg):
    doc = _doc(svg, '<polygon points="0,0 30,0 30,40"/><rect width="0" height="10"/><circle r="0"/>')
    polygon, rect, circle = doc.drawable_elements()
    assert doc.path_length(polygon) == pytest.approx(30 + 40 + 50)
    assert doc.bounding_box(rect) is None
    assert doc.path_length(circle) == 0


# ============================================================
# 10-12. Transforms
# ============================================================

def test_group_translate_and_scale(svg):
    doc = _doc(svg, '<g transform="translate(10 5) scale(2)"><rect width="10" height="10"/></g>')
    rect = _only(doc)
    assert doc.bounding_box(rect) == pytest.approx((10, 5, 30, 25))
    assert doc.path_length(rect) == pytest.approx(80)


def test_rotate_about_origin(svg):
    doc = _doc(svg, '<line x1="0" y1="0" x2="10" y2="0" transform="rotate(90)"/>')
    box = doc.bounding_box(_only(doc))
    assert box == pytest.approx((0, 0, 0, 10), abs=1e-9)


def test_transform_list_composes_left_to_right():
    m = parse_transform("translate(10,0) scale(2)")
    assert m == pytest.approx((2, 0, 0, 2, 10, 0))
    assert parse_transform("") == IDENTITY
    assert parse_transform("bogus(1)") == IDENTITY
    assert multiply(IDENTITY, m) == m


# ============================================================
# 13-17. Paint resolution
# ============================================================

def test_style_attribute_beats_presentation_attribute(svg):
    doc = _doc(svg, '<rect width="1" height="1" fill="red" style="fill: blue; stroke:#000"/>')
    rect = _only(doc)
    assert doc.resolved_fill(rect) == "blue"
    assert doc.resolved_stroke(rect) == "#000"


def test_paint_is_inherited_from_ancestors(svg):
    doc = _doc(svg, '<g stroke="red" stroke-width="3"><g><path d="M0 0 H10" stroke="inherit"/></g></g>')
    path = _only(doc)
    assert doc.resolved_stroke(path) == "red"
    assert doc.resolved_stroke_width(path) == 3
    assert doc.is_stroked(path)


def test_initial_values(svg):
    doc = _doc(svg, '<path d="M0 0 H10"/>')
    path = _only(doc)
    assert doc.resolved_fill(path) == "black"
    assert doc.resolved_stroke(path) == "none"
    assert doc.resolved_stroke_width(path) == 1.0
    assert doc.is_filled(path)
    assert not doc.is_stroked(path)


def test_zero_stroke_width_is_not_stroked(svg):
    doc = _doc(svg, '<path d="M0 0 H10" stroke="red" stroke-width="0"/><path d="M0 0 H10" stroke="red" stroke-width="2px"/>')
    hairline, thick = doc.drawable_elements()
    assert not doc.is_stroked(hairline)
    assert doc.resolved_stroke_width(thick) == 2.0
    assert doc.is_stroked(thick)


def test_fill_none_and_transparent(svg):
    doc = _doc(svg, '<rect width="1" height="1" fill="none"/><rect width="1" height="1" style="fill:transparent"/>')
    assert not any(doc.is_filled(el) for el in doc.drawable_elements())


# ============================================================
# 18-19. Containers and bounds
# ============================================================

def test_defs_and_clip_paths_are_not_drawn(svg):
    doc = _doc(svg, (
        '<defs><rect width="500" height="500"/></defs>'
        '<clipPath id="c"><circle r="300"/></clipPath>'
        '<g><rect x="10" y="10" width="10" height="10"/></g>'
    ))
    assert len(doc.drawable_elements()) == 1
    assert doc.content_bounds() == pytest.approx((10, 10, 20, 20))


def test_content_bounds_union_and_empty(svg):
    doc = _doc(svg, '<line x1="5" y1="5" x2="10" y2="5"/><circle cx="50" cy="50" r="5"/>')
    assert doc.content_bounds() == pytest.approx((5, 5, 55, 55))
    assert _doc(svg, "<g/>").content_bounds() is None
