"""
Artwork analysis and instant-quote endpoints.

POST /api/estimate/analyze  — upload artwork, get ArtworkMetrics + warnings
POST /api/estimate/         — metrics + job options -> three price packages
POST /api/estimate/artwork  — upload + job options -> analysis and packages
POST /api/estimate/kerf     — display-only kerf-adjusted metrics

Nothing is persisted here; saving a quote is the caller's job.
Every error detail has the shape {"error": <code>, "message": <text>}.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from . import api_error
from .. import schemas
from ..catalog import MaterialCatalog
from ..config import settings
from ..dependencies import get_catalog, get_extractor, get_pricing_engine
from ..errors import (
    InvalidDocumentError,
    InvalidJobOptionsError,
    MeasurementRangeError,
    UnknownMaterialError,
    ZeroDimensionError,
)
from ..extractor import GeometryExtractor
from ..kerf import adjust_for_kerf
from ..models import ArtworkAnalysis, ArtworkMetrics, Estimate, JobOptions, JobType
from ..pricing_engine import PricingEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/estimate", tags=["estimate"])


def _read_upload(file: UploadFile) -> bytes:
    """Read an upload, enforcing MAX_UPLOAD_BYTES."""
    data = file.file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise api_error(
            413, "file_too_large",
            f"File too large. Max {settings.MAX_UPLOAD_BYTES // (1024 * 1024)}MB.",
        )
    if not data:
        raise api_error(422, "invalid_document", "Uploaded file is empty.")
    return data


def _analyze(extractor: GeometryExtractor, data: bytes, physical_width_mm: float,
             filename: str) -> ArtworkAnalysis:
    try:
        return extractor.analyze(data, physical_width_mm, filename=filename)
    except ZeroDimensionError as e:
        logger.info("Artwork %r has no measurable width: %s", filename, e)
        raise api_error(422, "zero_dimension", str(e))
    except InvalidDocumentError as e:
        logger.info("Artwork %r rejected: %s", filename, e)
        raise api_error(422, "invalid_document", str(e))
    except MeasurementRangeError as e:
        logger.info("Artwork %r out of range: %s", filename, e)
        raise api_error(422, "out_of_range", str(e))


def _job_options(catalog: MaterialCatalog, material_id: str, thickness_mm: float,
                 job_type: JobType) -> JobOptions:
    try:
        material = catalog.get(material_id)
    except UnknownMaterialError as e:
        raise api_error(404, "unknown_material", str(e))
    try:
        return JobOptions(material=material, thickness_mm=thickness_mm, job_type=job_type)
    except InvalidJobOptionsError as e:
        raise api_error(422, "invalid_job_options", str(e))


def _build_estimate(engine: PricingEngine, metrics: ArtworkMetrics,
                    options: JobOptions) -> Estimate:
    try:
        return engine.build_estimate(metrics, options)
    except MeasurementRangeError as e:
        logger.info("Estimate out of range for %s: %s", options.material.id, e)
        raise api_error(422, "out_of_range", str(e))


def _analysis_out(analysis: ArtworkAnalysis) -> schemas.ArtworkAnalysisOut:
    return schemas.ArtworkAnalysisOut(
        kind=analysis.kind,
        metrics=analysis.metrics,
        high_complexity=analysis.high_complexity,
        warnings=[w.as_dict() for w in analysis.warnings],
    )


def _estimate_out(options: JobOptions, estimate: Estimate) -> schemas.EstimateOut:
    return schemas.EstimateOut(
        material=options.material,
        thickness_mm=options.thickness_mm,
        job_type=options.job_type,
        packages=estimate.packages,
        recommended=estimate.recommended().name.value,
        issues=estimate.issues,
        warnings=[w.as_dict() for w in estimate.warnings],
    )


@router.post("/analyze", response_model=schemas.ArtworkAnalysisOut)
def analyze_artwork(
    file: UploadFile = File(...),
    physical_width_mm: float = Form(settings.DEFAULT_PHYSICAL_WIDTH_MM, gt=0, allow_inf_nan=False),
    extractor: GeometryExtractor = Depends(get_extractor),
):
    """Measure uploaded artwork (SVG or raster) at the requested width."""
    data = _read_upload(file)
    analysis = _analyze(extractor, data, physical_width_mm, file.filename)
    return _analysis_out(analysis)


@router.post("/", response_model=schemas.EstimateOut)
def estimate_price(
    request: schemas.EstimateRequest,
    catalog: MaterialCatalog = Depends(get_catalog),
    engine: PricingEngine = Depends(get_pricing_engine),
):
    """Price already-measured artwork. Recompute on every option change."""
    options = _job_options(catalog, request.material_id, request.thickness_mm, request.job_type)
    estimate = _build_estimate(engine, request.metrics, options)
    return _estimate_out(options, estimate)


@router.post("/artwork", response_model=schemas.ArtworkEstimateOut)
def estimate_artwork(
    file: UploadFile = File(...),
    physical_width_mm: float = Form(settings.DEFAULT_PHYSICAL_WIDTH_MM, gt=0, allow_inf_nan=False),
    material_id: str = Form(...),
    thickness_mm: float = Form(..., gt=0, allow_inf_nan=False),
    job_type: JobType = Form(JobType.CUT),
    catalog: MaterialCatalog = Depends(get_catalog),
    engine: PricingEngine = Depends(get_pricing_engine),
    extractor: GeometryExtractor = Depends(get_extractor),
):
    """Upload + options in one call: analysis, then the three packages."""
    # Validate options before spending time on the artwork
    options = _job_options(catalog, material_id, thickness_mm, job_type)
    data = _read_upload(file)
    analysis = _analyze(extractor, data, physical_width_mm, file.filename)
    estimate = _build_estimate(engine, analysis.metrics, options)
    return schemas.ArtworkEstimateOut(
        analysis=_analysis_out(analysis),
        estimate=_estimate_out(options, estimate),
    )


@router.post("/kerf", response_model=schemas.KerfOut)
def kerf_preview(
    request: schemas.KerfRequest,
    catalog: MaterialCatalog = Depends(get_catalog),
):
    """
    Approximate cut length including beam width, for display only.
    Uses kerf_mm when given, otherwise the material's kerf.
    """
    if request.kerf_mm is not None:
        kerf_mm = request.kerf_mm
    elif request.material_id:
        try:
            kerf_mm = catalog.get(request.material_id).kerf_mm
        except UnknownMaterialError as e:
            raise api_error(404, "unknown_material", str(e))
    else:
        raise api_error(422, "missing_kerf", "Provide kerf_mm or material_id.")

    try:
        adjusted = adjust_for_kerf(request.metrics, kerf_mm)
    except MeasurementRangeError as e:
        raise api_error(422, "out_of_range", str(e))
    return schemas.KerfOut(kerf_mm=kerf_mm, metrics=adjusted)
