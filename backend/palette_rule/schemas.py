"""
Palette Rule Schemas
Pydantic models for palette analysis results and 60/30/10 rule reports.
"""
from typing import List, Literal

from pydantic import BaseModel, Field


class ColorPercentage(BaseModel):
    """One dominant color and its share of the ranked palette."""
    color: str = Field(
        ...,
        pattern=r"^rgb\(\d{1,3},\d{1,3},\d{1,3}\)$",
        description="Quantized color key in format rgb(r,g,b)"
    )
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex rendering of the same color (#RRGGBB)"
    )
    percentage: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Share of the top colors after normalization (0-100)"
    )


class AnalysisResult(BaseModel):
    """Ranked dominant colors of one image."""
    colors: List[ColorPercentage] = Field(
        default_factory=list,
        max_length=3,
        description="Up to three dominant colors, ordered by descending percentage"
    )
    total_colors: int = Field(
        0, ge=0,
        description="Distinct 16-level color buckets before similarity merging"
    )
    total_pixels: int = Field(0, ge=0, description="width × height of the input raster")
    stride: int = Field(1, ge=1, description="Sampling stride used")
    sampled_population: float = Field(
        0.0, ge=0.0,
        description="Percentage denominator before normalization (total_pixels / stride)"
    )
    opaque_samples: int = Field(0, ge=0, description="Visited pixels with alpha >= 128")
    cluster_count: int = Field(0, ge=0, description="Clusters produced by similarity merging")

    @property
    def colors_grouped(self) -> bool:
        """Whether more buckets were found than can be reported."""
        return self.total_colors > 3


class RuleSlot(BaseModel):
    """Comparison of one ranked color against its 60/30/10 target."""
    role: Literal["primary", "secondary", "accent"]
    color: str = Field(..., description="Quantized color key")
    target: float = Field(..., description="Target percentage for this rank")
    actual: float = Field(..., description="Measured percentage")
    variance: float = Field(..., description="actual - target, in percentage points")
    within_margin: bool = Field(..., description="|variance| <= margin")

    @property
    def variance_label(self) -> str:
        """Signed variance with one decimal, e.g. '+2.5%'."""
        sign = "+" if self.variance > 0 else ""
        return f"{sign}{self.variance:.1f}%"


class RuleReport(BaseModel):
    """Per-slot breakdown of the 60/30/10 rule check."""
    follows_rule: bool = Field(..., description="True iff exactly three slots are all within margin")
    margin: float = Field(..., description="Allowed absolute deviation in percentage points")
    targets: List[float] = Field(..., description="Targets in rank order")
    slots: List[RuleSlot] = Field(default_factory=list)


class PaletteReport(BaseModel):
    """Analysis result together with its rule evaluation."""
    analysis: AnalysisResult
    rule: RuleReport
