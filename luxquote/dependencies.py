"""
FastAPI dependencies — override these in tests via app.dependency_overrides.
"""

from .catalog import MaterialCatalog, default_catalog
from .config import settings
from .extractor import GeometryExtractor
from .pricing_engine import PricingConfig, PricingEngine


def get_catalog() -> MaterialCatalog:
    return default_catalog()


def get_pricing_engine() -> PricingEngine:
    return PricingEngine(PricingConfig.from_settings(settings))


def get_extractor() -> GeometryExtractor:
    return GeometryExtractor(complexity_cap=settings.COMPLEXITY_CAP)
