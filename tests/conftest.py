"""
Shared test fixtures — test client, catalog materials, sample artwork.
"""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from luxquote.catalog import default_catalog
from luxquote.main import app
from luxquote.models import Material


SVG_NS = "http://www.w3.org/2000/svg"


def make_svg(body: str, viewbox: str = "0 0 100 100") -> str:
    """Wrap SVG body markup in a root element."""
    vb = f' viewBox="{viewbox}"' if viewbox is not None else ""
    return f'<svg xmlns="{SVG_NS}"{vb}>{body}</svg>'


@pytest.fixture
def svg():
    """Factory for SVG documents: svg(body, viewbox="0 0 100 100")."""
    return make_svg


@pytest.fixture
def client():
    """FastAPI test client. Dependency overrides are cleared afterwards."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def acrylic():
    """Clear Acrylic from the default catalog: 0.0005 $/mm², kerf 0.15, min feature 0.5."""
    return default_catalog().get("mat_acrylic_clear_3mm")


@pytest.fixture
def chunky_material():
    """Material with a coarse 5mm minimum feature size."""
    return Material(
        id="mat_test_chunky",
        name="Chunky Test Board",
        cost_per_sq_mm=0.001,
        kerf_mm=0.3,
        min_feature_mm=5,
        thicknesses_mm=(3, 6),
    )


@pytest.fixture
def png_bytes():
    """200 x 100 px PNG."""
    buf = io.BytesIO()
    Image.new("RGB", (200, 100), "white").save(buf, format="PNG")
    return buf.getvalue()
