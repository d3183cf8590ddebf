from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

StackingPattern = Literal["column", "interlock", "auto"]


class CartonSpec(BaseModel):
    """Carton model with dimensions, weight and the quantity to load."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(description="Length of the carton")
    width: float = Field(description="Width of the carton")
    height: float = Field(description="Height of the carton")
    weight: float = Field(default=0.0, description="Weight of one carton in kg")
    quantity: int = Field(default=1, description="Number of cartons to load")


class PalletSpec(BaseModel):
    """Pallet model with deck dimensions and load capacity."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(description="Length of the pallet")
    width: float = Field(description="Width of the pallet")
    height: float = Field(description="Height of the pallet deck")
    max_weight: float = Field(default=0.0, description="Maximum cargo weight in kg")


class ContainerSpec(BaseModel):
    """Container model with inner dimensions and payload."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(description="Length of the container")
    width: float = Field(description="Width of the container")
    height: float = Field(description="Height of the container")
    max_weight: float = Field(default=0.0, description="Maximum payload in kg")


class Constraints(BaseModel):
    """Loading rules applied to every carton."""

    model_config = ConfigDict(frozen=True)

    max_stack_height: float = Field(
        default=200.0,
        description="Maximum height of pallet plus cargo (pallet loading only)",
    )
    allow_rotation_on_base: bool = Field(
        default=True,
        description="Cartons may swap length and width",
    )
    allow_vertical_rotation: bool = Field(
        default=True,
        description="Cartons may be laid on a side",
    )
    this_side_up: bool = Field(
        default=False,
        description="Cartons must never be tipped",
    )
    stacking_pattern: StackingPattern = Field(
        default="auto",
        description="Layer pattern: column, interlock, or auto to compare both",
    )


class Orientation(BaseModel):
    """One legal axis permutation of a carton."""

    model_config = ConfigDict(frozen=True)

    length: float
    width: float
    height: float
    # Carton axes placed along (length, width, height), e.g. "WLH"
    label: str

    @property
    def dims(self) -> tuple[float, float, float]:
        return (self.length, self.width, self.height)


class Position(BaseModel):
    """Origin corner of a placed item, relative to its owner."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(default=0.0, ge=0)
    y: float = Field(default=0.0, ge=0)
    z: float = Field(default=0.0, ge=0)


class CartonPlacement(BaseModel):
    """Placement model representing carton position and oriented dimensions."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(ge=0, description="X coordinate along the owner's length")
    y: float = Field(ge=0, description="Y coordinate along the owner's width")
    z: float = Field(ge=0, description="Z coordinate along the owner's height")
    rotation: str = Field(description="Rotation label of the placed carton")

    # Placed dimensions after rotation
    length: float
    width: float
    height: float


class PackedPallet(BaseModel):
    """A loaded pallet and its position inside a container."""

    model_config = ConfigDict(frozen=True)

    pallet_dimensions: PalletSpec = Field(
        description="Pallet dimensions in the facing used inside the container"
    )
    position: Position = Field(default_factory=Position)
    # Placement order, not spatial order
    cartons: list[CartonPlacement] = Field(default_factory=list)

    @property
    def carton_count(self) -> int:
        return len(self.cartons)


class PackedContainer(BaseModel):
    """A loaded container; contents are all cartons or all pallets."""

    model_config = ConfigDict(frozen=True)

    container_dimensions: ContainerSpec
    position: Position = Field(default_factory=Position)
    content_type: Literal["cartons", "pallets"]
    contents: list[Union[PackedPallet, CartonPlacement]] = Field(default_factory=list)
    utilization: float = Field(default=0.0, description="Space utilization in percent")
    weight_utilization: float = Field(default=0.0, description="Weight utilization in percent")

    @property
    def cartons(self) -> list[CartonPlacement]:
        """Every carton in the container, flattened across pallets."""
        if self.content_type == "cartons":
            return [c for c in self.contents if isinstance(c, CartonPlacement)]
        out: list[CartonPlacement] = []
        for pallet in self.contents:
            if isinstance(pallet, PackedPallet):
                out.extend(pallet.cartons)
        return out

    @property
    def carton_count(self) -> int:
        return len(self.cartons)


class OptimizationResult(BaseModel):
    """Complete loading plan returned by the engine."""

    model_config = ConfigDict(frozen=True)

    containers: list[PackedContainer] = Field(default_factory=list)
    total_cartons_packed: int = 0
    remaining_cartons: int = 0
    total_pallets_used: int = 0
    total_units_used: int = Field(
        default=0,
        description="Pallets in pallet mode, containers in direct mode",
    )
    total_containers_used: int = 0
    space_utilization: float = 0.0
    weight_utilization: float = 0.0
    selected_pattern: str = "column"
    best_orientation: str = ""
    weight_warning: Optional[str] = None
    pattern_comparison: dict[str, float] = Field(default_factory=dict)
