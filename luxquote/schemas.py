from pydantic import BaseModel, Field
from typing import Optional, List

from .models import ArtworkKind, ArtworkMetrics, JobType, Material, PricePackage


class WarningOut(BaseModel):
    code: str
    message: str


class ArtworkAnalysisOut(BaseModel):
    kind: ArtworkKind
    metrics: ArtworkMetrics
    high_complexity: bool = False
    warnings: List[WarningOut] = []


class EstimateRequest(BaseModel):
    metrics: ArtworkMetrics
    material_id: str
    thickness_mm: float = Field(gt=0, allow_inf_nan=False)
    job_type: JobType = JobType.CUT


class EstimateOut(BaseModel):
    material: Material
    thickness_mm: float
    job_type: JobType
    packages: List[PricePackage]
    recommended: str
    issues: List[str] = []
    warnings: List[WarningOut] = []


class ArtworkEstimateOut(BaseModel):
    analysis: ArtworkAnalysisOut
    estimate: EstimateOut


class KerfRequest(BaseModel):
    metrics: ArtworkMetrics
    material_id: Optional[str] = None
    kerf_mm: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)


class KerfOut(BaseModel):
    kerf_mm: float
    metrics: ArtworkMetrics
    approximate: bool = True
