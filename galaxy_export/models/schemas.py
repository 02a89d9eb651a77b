import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

STAR_CLASSES = ("O", "B", "A", "F", "G", "K", "M")


class StarType(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    star_class: str = Field(alias="class")
    description: str = ""
    color: Optional[str] = None
    temperature: Optional[int] = None
    luminosity: Optional[float] = None


class MultiStarSystem(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: StarType
    secondary: Optional[StarType] = None
    tertiary: Optional[StarType] = None
    is_binary: bool = False
    is_trinary: bool = False
    count: int = 1


class StarSystem(BaseModel):
    """One node's reported star system.

    Nodes either send a flat ``star_type`` or the multi-star ``stars`` block,
    in which case the primary star stands in for the system's class.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = Field(min_length=1)
    star_type: StarType
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    last_seen_at: datetime
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    address: Optional[str] = None
    peer_address: Optional[str] = None
    stars: Optional[MultiStarSystem] = None

    @model_validator(mode="before")
    @classmethod
    def _primary_as_star_type(cls, data):
        if isinstance(data, dict) and data.get("star_type") is None:
            stars = data.get("stars")
            if isinstance(stars, dict) and stars.get("primary") is not None:
                data = {**data, "star_type": stars["primary"]}
        return data

    @property
    def position(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    def distance_to(self, other: "StarSystem") -> float:
        return math.dist(self.position, other.position)


class GalaxySnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    systems: List[StarSystem]
    timestamp: str
    node_count: int


class FetchStage(Enum):
    CONNECT = "connect"
    READ = "read"
    DECODE = "decode"
    VALIDATE = "validate"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class FetchFailure:
    address: str
    stage: FetchStage
    reason: str


@dataclass
class CollectionResult:
    requested: int
    systems: List[StarSystem] = field(default_factory=list)
    failures: List[FetchFailure] = field(default_factory=list)


@dataclass(frozen=True)
class ClassShare:
    star_class: str
    count: int
    percentage: float


@dataclass(frozen=True)
class GalaxyStatistics:
    total: int
    classes: List[ClassShare]
    mean_distance: Optional[float] = None
