"""
Geometry Extractor — artwork file -> ArtworkMetrics.

Vector artwork (SVG) is measured element by element: stroked outlines are
cut paths, filled shapes are engrave regions, and every drawable element
counts toward path complexity. Raster artwork has no outlines, so it is
quoted as a full-bleed engrave of its bounding rectangle.

Measurements are taken in the artwork's native units and scaled so the
artwork's width matches the physical width the customer asked for.
"""

import io
import math
import logging

from PIL import Image

from .errors import (
    HighComplexityWarning,
    InvalidDocumentError,
    MeasurementRangeError,
    ZeroDimensionError,
)
from .geometry import VectorDocument
from .models import ArtworkAnalysis, ArtworkKind, ArtworkMetrics

logger = logging.getLogger(__name__)

DEFAULT_COMPLEXITY_CAP = 1000


class GeometryExtractor:
    """
    Measures artwork at a requested physical width.

    Above complexity_cap drawable elements, cut length is approximated by
    the perimeter of the artwork's frame (its viewBox, else the content box)
    and no element geometry is built.
    """

    def __init__(self, complexity_cap: int = DEFAULT_COMPLEXITY_CAP):
        if complexity_cap < 0:
            raise ValueError("complexity_cap must be >= 0")
        self.complexity_cap = complexity_cap

    def analyze_svg(self, source, physical_width_mm: float) -> ArtworkAnalysis:
        """
        Measure SVG artwork.

        Args:
            source: SVG markup (bytes or str) or an already parsed VectorDocument
            physical_width_mm: target print width

        Raises:
            InvalidDocumentError: malformed markup or non-svg root
            ZeroDimensionError: native width resolves to zero
        """
        _check_physical_width(physical_width_mm)
        doc = source if isinstance(source, VectorDocument) else VectorDocument.parse(source)

        elements = doc.drawable_elements()
        native_width, native_height, content = self._native_size(doc, elements)
        if native_width <= 0:
            raise ZeroDimensionError(
                "Could not determine SVG dimensions. Add a viewBox or make sure "
                "the artwork contains visible geometry."
            )

        scale = physical_width_mm / native_width
        complexity = len(elements)
        warnings = []

        if complexity > self.complexity_cap:
            # No per-element geometry here. Content bounds exist only when the
            # viewBox could not size the artwork and they were already needed.
            if content is not None:
                box_width, box_height = content[2] - content[0], content[3] - content[1]
            else:
                box_width, box_height = native_width, native_height
            total_length = 2.0 * (box_width + box_height)
            # Engrave area is not accumulated past the cap
            engrave_area = 0.0
            logger.warning(
                "Artwork has %d drawable elements (cap %d); cut length approximated "
                "from the artwork frame perimeter", complexity, self.complexity_cap,
            )
            warnings.append(HighComplexityWarning(
                message=(
                    f"Artwork contains {complexity} shapes (limit {self.complexity_cap}). "
                    f"Cut length was approximated from the artwork frame and "
                    f"engraving area was not measured; the final price may differ."
                ),
            ))
        else:
            total_length = 0.0
            engrave_area = 0.0
            for el in elements:
                if doc.is_stroked(el):
                    total_length += doc.path_length(el)
                if doc.is_filled(el):
                    box = doc.bounding_box(el)
                    if box is not None:
                        engrave_area += (box[2] - box[0]) * (box[3] - box[1])

        metrics = _build_metrics(
            width_mm=physical_width_mm,
            height_mm=native_height * scale,
            cut_length_mm=total_length * scale,
            engrave_area_sq_mm=engrave_area * scale * scale,
            path_complexity=complexity,
        )
        logger.debug(
            "SVG measured: native %.3f x %.3f, scale %.6f, %d elements -> %s",
            native_width, native_height, scale, complexity, metrics,
        )
        return ArtworkAnalysis(metrics=metrics, kind=ArtworkKind.VECTOR, warnings=tuple(warnings))

    def analyze_raster(self, data: bytes, physical_width_mm: float) -> ArtworkAnalysis:
        """
        Measure raster artwork (PNG, JPEG, ...) from its intrinsic pixel size.

        Raster input cannot be cut, so cut length is zero and the whole
        bounding rectangle is treated as engrave area.
        """
        _check_physical_width(physical_width_mm)
        if not data:
            raise InvalidDocumentError("Unreadable image: no content")
        try:
            with Image.open(io.BytesIO(data)) as img:
                width_px, height_px = img.size
        except (OSError, Image.DecompressionBombError) as e:
            raise InvalidDocumentError(f"Unreadable image: {e}") from e

        if width_px <= 0:
            raise ZeroDimensionError("Could not determine image dimensions.")

        height_mm = physical_width_mm * height_px / width_px
        metrics = _build_metrics(
            width_mm=physical_width_mm,
            height_mm=height_mm,
            cut_length_mm=0.0,
            engrave_area_sq_mm=physical_width_mm * height_mm,
            path_complexity=1,
        )
        logger.debug("Raster measured: %dx%d px -> %s", width_px, height_px, metrics)
        return ArtworkAnalysis(metrics=metrics, kind=ArtworkKind.RASTER)

    def analyze(self, data, physical_width_mm: float, filename: str = None) -> ArtworkAnalysis:
        """Dispatch on content: SVG markup goes to analyze_svg, anything else is raster."""
        if is_svg(data, filename):
            return self.analyze_svg(data, physical_width_mm)
        return self.analyze_raster(data, physical_width_mm)

    def _native_size(self, doc: VectorDocument, elements: list):
        """
        Native (width, height) plus content bounds when they were needed.

        A positive viewBox dimension wins; otherwise the bounding box of
        all drawable content is used, per axis.
        """
        viewbox = doc.viewbox
        vb_width = viewbox[2] if viewbox and viewbox[2] > 0 else None
        vb_height = viewbox[3] if viewbox and viewbox[3] > 0 else None

        content = None
        if vb_width is None or vb_height is None:
            content = doc.content_bounds(elements)

        if vb_width is not None:
            width = vb_width
        else:
            width = content[2] - content[0] if content else 0.0
        if vb_height is not None:
            height = vb_height
        else:
            height = content[3] - content[1] if content else 0.0
        return width, height, content


def is_svg(data, filename: str = None) -> bool:
    """True for SVG markup. Raster formats never start with '<'."""
    if isinstance(data, str):
        return True
    if filename and filename.lower().endswith(".svg"):
        return True
    if not data:
        return False
    head = data[:1024].lstrip(b"\xef\xbb\xbf \t\r\n")
    return head.startswith(b"<")


def _check_physical_width(physical_width_mm: float):
    if physical_width_mm is None or not physical_width_mm > 0 or not math.isfinite(physical_width_mm):
        raise ValueError(f"physical_width_mm must be a finite number > 0, got {physical_width_mm!r}")


def _build_metrics(**values) -> ArtworkMetrics:
    for name, value in values.items():
        if not math.isfinite(value):
            raise MeasurementRangeError(
                f"Artwork measurement {name} is out of range at this width ({value!r})."
            )
    return ArtworkMetrics(**values)


# --- Module-level conveniences ---

def analyze_svg(source, physical_width_mm: float,
                complexity_cap: int = DEFAULT_COMPLEXITY_CAP) -> ArtworkAnalysis:
    return GeometryExtractor(complexity_cap).analyze_svg(source, physical_width_mm)


def extract_metrics(source, physical_width_mm: float,
                    complexity_cap: int = DEFAULT_COMPLEXITY_CAP) -> ArtworkMetrics:
    """SVG artwork -> ArtworkMetrics. Raises InvalidDocumentError on failure."""
    return analyze_svg(source, physical_width_mm, complexity_cap).metrics


def analyze_raster(data: bytes, physical_width_mm: float) -> ArtworkAnalysis:
    return GeometryExtractor().analyze_raster(data, physical_width_mm)


def analyze_artwork(data, physical_width_mm: float, filename: str = None,
                    complexity_cap: int = DEFAULT_COMPLEXITY_CAP) -> ArtworkAnalysis:
    return GeometryExtractor(complexity_cap).analyze(data, physical_width_mm, filename)
