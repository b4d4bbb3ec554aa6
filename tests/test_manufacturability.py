"""
Manufacturability Checker tests.

Tests:
1-3. Minimum feature size against overall dimensions
4-5. Short cut paths
6-7. Multiple findings, warning records
"""

from luxquote.manufacturability import check_manufacturability, manufacturability_warnings
from luxquote.models import ArtworkMetrics, Material


def _metrics(width=100, height=50, cut=300, engrave=0, complexity=1):
    return ArtworkMetrics(
        width_mm=width,
        height_mm=height,
        cut_length_mm=cut,
        engrave_area_sq_mm=engrave,
        path_complexity=complexity,
    )


def test_normal_artwork_has_no_issues(acrylic):
    assert check_manufacturability(_metrics(), acrylic) == []


def test_small_artwork_mentions_min_feature(chunky_material):
    issues = check_manufacturability(_metrics(width=4, height=20, cut=48), chunky_material)
    assert len(issues) == 1
    assert "5mm" in issues[0]
    assert "Chunky Test Board" in issues[0]


def test_zero_min_feature_never_flags_dimensions():
    material = Material(
        id="mat_film", name="Film", cost_per_sq_mm=0.0001,
        kerf_mm=0, min_feature_mm=0, thicknesses_mm=(0.1,),
    )
    assert check_manufacturability(_metrics(width=0.01, height=0, cut=0), material) == []


def test_short_cut_path_is_flagged(chunky_material):
    issues = check_manufacturability(_metrics(width=20, height=20, cut=8), chunky_material)
    assert len(issues) == 1
    assert "8.00mm" in issues[0]


def test_engrave_only_artwork_has_no_cut_issue(chunky_material):
    issues = check_manufacturability(_metrics(width=20, height=20, cut=0, engrave=400), chunky_material)
    assert issues == []


def test_all_violations_are_reported(chunky_material):
    issues = check_manufacturability(_metrics(width=2, height=2, cut=8), chunky_material)
    assert len(issues) == 2


def test_warning_records_carry_the_same_messages(chunky_material):
    metrics = _metrics(width=2, height=2, cut=8)
    warnings = manufacturability_warnings(metrics, chunky_material, 3)
    assert [w.message for w in warnings] == check_manufacturability(metrics, chunky_material)
    assert all(w.code == "manufacturability" for w in warnings)
