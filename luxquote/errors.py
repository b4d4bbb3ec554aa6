"""
Error taxonomy for the quoting core.

Extraction failures are raised and abort the pipeline before any estimate
is produced. Manufacturability and complexity findings are never raised:
they travel as QuoteWarning records next to the result they describe.
"""

from dataclasses import dataclass


class LuxQuoteError(Exception):
    """Base class for every error raised by the quoting core."""


class InvalidDocumentError(LuxQuoteError):
    """Artwork could not be parsed: malformed markup, wrong root element,
    unreadable image data."""


class ZeroDimensionError(InvalidDocumentError):
    """Artwork parsed but its native width resolves to zero, so no scale
    can be computed."""


class UnknownMaterialError(LuxQuoteError, KeyError):
    """Material id not present in the catalog."""

    def __init__(self, material_id: str):
        super().__init__(material_id)
        self.material_id = material_id

    def __str__(self):
        return f"Unknown material: {self.material_id}"


class InvalidJobOptionsError(LuxQuoteError, ValueError):
    """Job options inconsistent with the selected material."""


class MeasurementRangeError(LuxQuoteError, ValueError):
    """A measurement or price is not a finite number (overflow or inf/nan input)."""


@dataclass(frozen=True)
class QuoteWarning:
    """Advisory finding attached to an analysis or estimate."""

    code: str
    message: str

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class ManufacturabilityWarning(QuoteWarning):
    code: str = "manufacturability"
    message: str = ""


@dataclass(frozen=True)
class HighComplexityWarning(QuoteWarning):
    code: str = "high_complexity"
    message: str = ""
