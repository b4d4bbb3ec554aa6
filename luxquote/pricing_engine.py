"""
Price Estimator.

Turns ArtworkMetrics + JobOptions into three PricePackages (Economy,
Standard, Express). Pure math: same inputs, same packages, every time.

    material  = width x height x cost_per_sq_mm x (thickness / 3mm)
    cut       = cut_length x CUT_COST_PER_MM          (cut / both)
    engrave   = engrave_area x ENGRAVE_COST_PER_SQ_MM  (engrave / both)
    complexity = path_complexity x COMPLEXITY_SURCHARGE_FACTOR
    base      = max(setup + material + cut + engrave + complexity, MINIMUM_JOB_COST)
    tier      = base + (cut + engrave) x (multiplier - 1)

Only machine-time costs (cut + engrave) scale with the speed tier.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ManufacturabilityWarning, MeasurementRangeError
from .manufacturability import check_manufacturability
from .models import ArtworkMetrics, Estimate, JobOptions, PricePackage, TierName

logger = logging.getLogger(__name__)

REFERENCE_THICKNESS_MM = 3.0  # material cost is normalized against 3mm stock

# Breakdown labels, in display order
SETUP_FEE = "Setup Fee"
MATERIAL_COST = "Material Cost"
CUT_COST = "Cut Cost"
ENGRAVE_COST = "Engrave Cost"
COMPLEXITY_SURCHARGE = "Complexity Surcharge"
SPEED_SURCHARGE = "Speed Surcharge"

_CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round half-up to cents on the exact binary value of the float."""
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


class PricingTier(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: TierName
    lead_time: str
    multiplier: float = Field(ge=1.0)


DEFAULT_TIERS: Tuple[PricingTier, ...] = (
    PricingTier(name=TierName.ECONOMY, lead_time="5-7 days", multiplier=1.0),
    PricingTier(name=TierName.STANDARD, lead_time="3-4 days", multiplier=1.5),
    PricingTier(name=TierName.EXPRESS, lead_time="1-2 days", multiplier=2.5),
)


class PricingConfig(BaseModel):
    """Immutable pricing table. Pass a custom one to PricingEngine to reprice."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    setup_fee: float = Field(default=5.00, ge=0)
    minimum_job_cost: float = Field(default=10.00, ge=0)
    cut_cost_per_mm: float = Field(default=0.02, ge=0)
    engrave_cost_per_sq_mm: float = Field(default=0.005, ge=0)
    complexity_surcharge_factor: float = Field(default=0.001, ge=0)
    tiers: Tuple[PricingTier, ...] = DEFAULT_TIERS

    @field_validator("tiers")
    @classmethod
    def _tiers_ordered(cls, tiers):
        names = tuple(t.name for t in tiers)
        expected = tuple(TierName)
        if names != expected:
            raise ValueError(
                f"tiers must be exactly {[n.value for n in expected]} in that order, "
                f"got {[n.value for n in names]}"
            )
        # Non-decreasing multipliers keep Economy <= Standard <= Express
        for slower, faster in zip(tiers, tiers[1:]):
            if faster.multiplier < slower.multiplier:
                raise ValueError(
                    f"{faster.name.value} multiplier ({faster.multiplier}) is lower than "
                    f"{slower.name.value} ({slower.multiplier})"
                )
        return tiers

    @classmethod
    def from_settings(cls, settings) -> "PricingConfig":
        return cls(
            setup_fee=settings.SETUP_FEE,
            minimum_job_cost=settings.MINIMUM_JOB_COST,
            cut_cost_per_mm=settings.CUT_COST_PER_MM,
            engrave_cost_per_sq_mm=settings.ENGRAVE_COST_PER_SQ_MM,
            complexity_surcharge_factor=settings.COMPLEXITY_SURCHARGE_FACTOR,
        )


DEFAULT_PRICING = PricingConfig()


class PricingEngine:
    """
    Computes the three speed-tier packages for one job.
    """

    def __init__(self, config: PricingConfig = None):
        self.config = config or DEFAULT_PRICING

    def estimate(self, metrics: ArtworkMetrics, options: JobOptions) -> List[PricePackage]:
        """
        Returns one PricePackage per tier, slowest first.

        All tiers share the same base cost; only the speed surcharge differs.
        """
        costs = self._calculate_costs(metrics, options)
        return [self._build_package(tier, costs) for tier in self.config.tiers]

    def build_estimate(self, metrics: ArtworkMetrics, options: JobOptions) -> Estimate:
        """
        Packages plus manufacturability findings.

        Findings are advisory: they are logged and returned, never raised,
        and they do not change the price.
        """
        issues = check_manufacturability(metrics, options.material, options.thickness_mm)
        for issue in issues:
            logger.info("Manufacturability issue (%s): %s", options.material.id, issue)
        return Estimate(
            packages=self.estimate(metrics, options),
            issues=issues,
            warnings=[ManufacturabilityWarning(message=issue) for issue in issues],
        )

    def _calculate_costs(self, metrics: ArtworkMetrics, options: JobOptions) -> dict:
        cfg = self.config
        material_cost = self._calculate_material_cost(metrics, options)
        cut_cost = (
            metrics.cut_length_mm * cfg.cut_cost_per_mm
            if options.job_type.includes_cut else 0.0
        )
        engrave_cost = (
            metrics.engrave_area_sq_mm * cfg.engrave_cost_per_sq_mm
            if options.job_type.includes_engrave else 0.0
        )
        complexity_surcharge = metrics.path_complexity * cfg.complexity_surcharge_factor

        # The minimum applies to the sum, not to individual components
        subtotal = cfg.setup_fee + material_cost + cut_cost + engrave_cost + complexity_surcharge
        base_cost = max(subtotal, cfg.minimum_job_cost)

        return {
            "setup_fee": cfg.setup_fee,
            "material_cost": material_cost,
            "cut_cost": cut_cost,
            "engrave_cost": engrave_cost,
            "complexity_surcharge": complexity_surcharge,
            "base_cost": base_cost,
        }

    def _calculate_material_cost(self, metrics: ArtworkMetrics, options: JobOptions) -> float:
        """Sheet area x unit cost, scaled linearly with thickness."""
        area = metrics.width_mm * metrics.height_mm
        thickness_factor = options.thickness_mm / REFERENCE_THICKNESS_MM
        return area * options.material.cost_per_sq_mm * thickness_factor

    def _build_package(self, tier: PricingTier, costs: dict) -> PricePackage:
        machine_cost = costs["cut_cost"] + costs["engrave_cost"]
        speed_surcharge = machine_cost * (tier.multiplier - 1)
        # Not re-floored: base_cost already carries the minimum and the surcharge is >= 0
        total = costs["base_cost"] + speed_surcharge
        if not math.isfinite(total):
            raise MeasurementRangeError(
                f"{tier.name.value} price is out of range; check the artwork dimensions."
            )
        return PricePackage(
            name=tier.name,
            lead_time=tier.lead_time,
            machine_time_multiplier=tier.multiplier,
            total=round2(total),
            breakdown={
                SETUP_FEE: round2(costs["setup_fee"]),
                MATERIAL_COST: round2(costs["material_cost"]),
                CUT_COST: round2(costs["cut_cost"]),
                ENGRAVE_COST: round2(costs["engrave_cost"]),
                COMPLEXITY_SURCHARGE: round2(costs["complexity_surcharge"]),
                SPEED_SURCHARGE: round2(speed_surcharge),
            },
        )


def estimate(metrics: ArtworkMetrics, options: JobOptions,
             config: PricingConfig = None) -> List[PricePackage]:
    """Module-level shortcut for PricingEngine(config).estimate(...)."""
    return PricingEngine(config).estimate(metrics, options)
