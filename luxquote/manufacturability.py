"""
Manufacturability Checker — can this artwork be cut from this material?

Pure and non-blocking: findings come back as human-readable strings that
the storefront shows as warnings. Nothing here raises.
"""

from typing import List

from .errors import ManufacturabilityWarning
from .models import ArtworkMetrics, Material


def check_manufacturability(metrics: ArtworkMetrics, material: Material,
                            thickness_mm: float = None) -> List[str]:
    """
    Validate metrics against the material's physical limits.

    Every rule is evaluated; all violations are reported.
    thickness_mm is reserved for thickness-dependent rules and is not
    consulted yet.
    """
    issues = []
    min_feature = material.min_feature_mm

    if min_feature > 0 and (metrics.width_mm < min_feature or metrics.height_mm < min_feature):
        issues.append(
            f"Artwork dimensions ({metrics.width_mm:.2f}mm x {metrics.height_mm:.2f}mm) "
            f"are smaller than the {min_feature:g}mm minimum feature size for {material.name}."
        )

    # Paths shorter than two minimum features can't absorb kerf and feature size together
    if 0 < metrics.cut_length_mm < min_feature * 2:
        issues.append(
            f"Total cut path length ({metrics.cut_length_mm:.2f}mm) is shorter than twice "
            f"the {min_feature:g}mm minimum feature size; kerf may consume the part."
        )

    return issues


def manufacturability_warnings(metrics: ArtworkMetrics, material: Material,
                               thickness_mm: float = None) -> List[ManufacturabilityWarning]:
    """Same findings as check_manufacturability, as warning records."""
    return [
        ManufacturabilityWarning(message=issue)
        for issue in check_manufacturability(metrics, material, thickness_mm)
    ]
