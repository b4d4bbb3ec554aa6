import enum
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidJobOptionsError, QuoteWarning


class JobType(str, enum.Enum):
    CUT = "cut"
    ENGRAVE = "engrave"
    BOTH = "both"

    @property
    def includes_cut(self) -> bool:
        return self in (JobType.CUT, JobType.BOTH)

    @property
    def includes_engrave(self) -> bool:
        return self in (JobType.ENGRAVE, JobType.BOTH)


class TierName(str, enum.Enum):
    ECONOMY = "Economy"
    STANDARD = "Standard"
    EXPRESS = "Express"


class ArtworkKind(str, enum.Enum):
    VECTOR = "vector"
    RASTER = "raster"


class Material(BaseModel):
    """Catalog material. Read-only to the quoting core."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    name: str
    description: str = ""
    color_swatch: str = "#ffffff"
    cost_per_sq_mm: float = Field(ge=0)  # USD
    kerf_mm: float = Field(ge=0)
    min_feature_mm: float = Field(ge=0)
    thicknesses_mm: Tuple[float, ...] = Field(min_length=1)
    thumbnail_url: str = ""

    def offers_thickness(self, thickness_mm: float) -> bool:
        return any(math.isclose(t, thickness_mm) for t in self.thicknesses_mm)


class ArtworkMetrics(BaseModel):
    """Physical measurements of one artwork at its requested print width."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    width_mm: float = Field(gt=0)
    height_mm: float = Field(ge=0)
    cut_length_mm: float = Field(ge=0)
    engrave_area_sq_mm: float = Field(ge=0)
    path_complexity: int = Field(ge=0)


@dataclass(frozen=True)
class JobOptions:
    material: Material
    thickness_mm: float
    job_type: JobType = JobType.CUT

    def __post_init__(self):
        # Accept plain strings for job_type ("cut", "engrave", "both")
        if not isinstance(self.job_type, JobType):
            try:
                object.__setattr__(self, "job_type", JobType(self.job_type))
            except ValueError:
                raise InvalidJobOptionsError(
                    f"Unknown job type: {self.job_type!r}. "
                    f"Expected one of: {[j.value for j in JobType]}"
                )
        if not self.material.offers_thickness(self.thickness_mm):
            raise InvalidJobOptionsError(
                f"{self.material.name} is not available in {self.thickness_mm:g}mm. "
                f"Available: {', '.join(f'{t:g}mm' for t in self.material.thicknesses_mm)}"
            )


class PricePackage(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: TierName
    lead_time: str
    machine_time_multiplier: float
    total: float
    breakdown: dict[str, float]

    def visible_breakdown(self) -> dict[str, float]:
        """Breakdown rows worth showing to a customer (zero rows hidden)."""
        return {k: v for k, v in self.breakdown.items() if v > 0}


@dataclass(frozen=True)
class ArtworkAnalysis:
    metrics: ArtworkMetrics
    kind: ArtworkKind = ArtworkKind.VECTOR
    warnings: Tuple[QuoteWarning, ...] = ()

    @property
    def high_complexity(self) -> bool:
        return any(w.code == "high_complexity" for w in self.warnings)


@dataclass(frozen=True)
class Estimate:
    """Three price packages plus the advisory findings they were computed with."""

    packages: List[PricePackage]
    issues: List[str] = field(default_factory=list)
    warnings: List[QuoteWarning] = field(default_factory=list)

    def package(self, name) -> Optional[PricePackage]:
        name = TierName(name)
        for pkg in self.packages:
            if pkg.name == name:
                return pkg
        return None

    def recommended(self) -> PricePackage:
        """The tier preselected in the storefront and saved by default."""
        return self.package(TierName.STANDARD) or self.packages[0]
