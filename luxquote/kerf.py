"""
Kerf Adjuster — display-only estimate of the extra path the beam travels.

APPROXIMATION: real kerf compensation offsets every path by half the beam
width along its normal. Here the bounding-box perimeter times the kerf is
added to the cut length instead. Never feed the result into pricing.
"""

import math

from .errors import MeasurementRangeError
from .models import ArtworkMetrics


def adjust_for_kerf(metrics: ArtworkMetrics, kerf_mm: float) -> ArtworkMetrics:
    """
    cut_length' = cut_length + 2 * (width + height) * kerf_mm.

    All other fields pass through unchanged. Kerf must be >= 0 so the
    adjustment can only add length.
    """
    if not kerf_mm >= 0 or not math.isfinite(kerf_mm):
        raise ValueError(f"kerf_mm must be a finite number >= 0, got {kerf_mm}")
    perimeter = 2.0 * (metrics.width_mm + metrics.height_mm)
    cut_length = metrics.cut_length_mm + perimeter * kerf_mm
    if not math.isfinite(cut_length):
        raise MeasurementRangeError("Kerf-adjusted cut length is out of range.")
    return metrics.model_copy(update={"cut_length_mm": cut_length})
