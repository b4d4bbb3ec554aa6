"""
Material catalog — the sheet stock the shop cuts.

Read-only to the quoting core. Prices are per square millimetre of 3mm
stock; the estimator scales them with thickness.
"""

from typing import Dict, Iterable, List

from .errors import UnknownMaterialError
from .models import Material

DEFAULT_MATERIALS: List[Material] = [
    Material(
        id="mat_acrylic_clear_3mm",
        name="Clear Acrylic",
        description="Versatile and clear, great for displays and enclosures.",
        color_swatch="#ffffff",
        cost_per_sq_mm=0.0005,
        kerf_mm=0.15,
        min_feature_mm=0.5,
        thicknesses_mm=(1.5, 3, 6),
        thumbnail_url="https://images.unsplash.com/photo-1614154118323-35613f355910?q=80&w=800&auto=format&fit=crop",
    ),
    Material(
        id="mat_birch_ply_3mm",
        name="Birch Plywood",
        description="Strong and light with a beautiful wood grain finish.",
        color_swatch="#E1C699",
        cost_per_sq_mm=0.0004,
        kerf_mm=0.2,
        min_feature_mm=0.8,
        thicknesses_mm=(3, 6),
        thumbnail_url="https://images.unsplash.com/photo-1595934621923-316f6008a8a4?q=80&w=800&auto=format&fit=crop",
    ),
    Material(
        id="mat_mdf_3mm",
        name="MDF",
        description="Economical and smooth, perfect for painting and prototyping.",
        color_swatch="#C3B091",
        cost_per_sq_mm=0.0002,
        kerf_mm=0.25,
        min_feature_mm=1.0,
        thicknesses_mm=(3, 6, 12),
        thumbnail_url="https://images.unsplash.com/photo-1523568943349-65d8a10da3ea?q=80&w=800&auto=format&fit=crop",
    ),
    Material(
        id="mat_delrin_black_6mm",
        name="Black Delrin (Acetal)",
        description="High-performance engineering plastic, excellent for mechanical parts.",
        color_swatch="#222222",
        cost_per_sq_mm=0.0012,
        kerf_mm=0.1,
        min_feature_mm=0.4,
        thicknesses_mm=(1.5, 3, 6),
        thumbnail_url="https://images.unsplash.com/photo-1609503221888-91580335f288?q=80&w=800&auto=format&fit=crop",
    ),
]


class MaterialCatalog:
    """In-memory lookup over a fixed set of materials."""

    def __init__(self, materials: Iterable[Material] = None):
        source = DEFAULT_MATERIALS if materials is None else materials
        self._materials: Dict[str, Material] = {m.id: m for m in source}

    def list(self) -> List[Material]:
        return list(self._materials.values())

    def get(self, material_id: str) -> Material:
        """Returns the material or raises UnknownMaterialError."""
        try:
            return self._materials[material_id]
        except KeyError:
            raise UnknownMaterialError(material_id) from None

    def __contains__(self, material_id) -> bool:
        return material_id in self._materials

    def __len__(self) -> int:
        return len(self._materials)


_default_catalog = MaterialCatalog()


def default_catalog() -> MaterialCatalog:
    return _default_catalog
