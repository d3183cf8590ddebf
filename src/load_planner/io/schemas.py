"""Data schemas for input/output operations."""

from typing import Optional

from pydantic import BaseModel, Field

from load_planner.models import CartonSpec, Constraints, ContainerSpec, OptimizationResult, PalletSpec


class OptimizeRequest(BaseModel):
    """Schema for an optimization request (API body and CLI input file)."""
    carton: CartonSpec
    constraints: Constraints = Field(default_factory=Constraints)
    use_pallets: bool = Field(default=False, description="Load cartons onto pallets first")
    container: Optional[ContainerSpec] = None
    container_preset: Optional[str] = Field(None, description="Preset name, e.g. 20, 40, 40HC")
    pallet: Optional[PalletSpec] = None
    pallet_preset: Optional[str] = Field(None, description="Preset name, e.g. EUR, NA, ASIA")
    this_side_up: bool = False
    fragile: bool = False


class MetricsSchema(BaseModel):
    """Schema for the flat metrics block of a response."""
    cartons_requested: int
    cartons_loaded: int
    cartons_unloaded: int
    containers_used: int
    pallets_used: int
    space_utilization: float
    weight_utilization: float
    orientation: str
    pattern: str
    weight_warning: Optional[str] = None


class OptimizeResponse(BaseModel):
    """Schema for an optimization response."""
    metrics: MetricsSchema
    summary: str
    plan: OptimizationResult
