"""
Embedded 2D geometry for artwork measurement.

Parses SVG markup and answers the questions quoting needs: how long is the
outline of an element, what box does it occupy, is it stroked or filled.
No rendering engine involved; shapely provides the geometric primitives.
"""

from .document import VectorDocument
from .path_data import PathDataError, parse_path_data
from .transforms import parse_transform

__all__ = ["VectorDocument", "PathDataError", "parse_path_data", "parse_transform"]
