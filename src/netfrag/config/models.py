import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from netfrag.services.connectivity import OVERSIZED_THRESHOLD


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1000


# ----------------- SOURCES ---------------------


class _PathSourceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str

    @field_validator("path")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class JsonlSourceModel(_PathSourceModel):
    kind: Literal["jsonl"] = "jsonl"


class PbfSourceModel(_PathSourceModel):
    kind: Literal["pbf"] = "pbf"
    with_relations: bool = False


SourceUnion = Annotated[JsonlSourceModel | PbfSourceModel, Field(discriminator="kind")]


# ----------------- FILTERS ---------------------


class FilterAllModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["all"] = "all"


class FilterTagModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["tag"] = "tag"
    key: str
    values: list[str] | None = None

    @field_validator("key")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("tag filter needs a non-empty key")
        return v

    @field_validator("values", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        # [] means "any value"
        if v is None or (isinstance(v, (list, tuple)) and len(v) == 0):
            return None
        return v


FilterUnion = Annotated[FilterAllModel | FilterTagModel, Field(discriminator="kind")]


# ----------------- ADJACENCY ---------------------


class AdjacencyWayModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["way"] = "way"


class AdjacencyEdgeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["edge"] = "edge"


AdjacencyUnion = Annotated[AdjacencyWayModel | AdjacencyEdgeModel, Field(discriminator="kind")]


# ----------------- ANALYSIS ---------------------


class AnalysisModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    threshold: int = OVERSIZED_THRESHOLD
    root_order: Literal["unordered", "sorted", "shuffled"] = "unordered"
    seed: int = 123  # only used by root_order="shuffled"
    size_convention: Literal["nodes", "legacy"] = "nodes"

    @field_validator("threshold")
    def _nonneg(cls, v: int, info: ValidationInfo) -> int:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


# ------------------------------------------------------------------


class RunModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "netfrag"
    run_id: str = "local"
    source: SourceUnion | None = None  # None => caller passes a PrimitiveSource to build()
    filter: FilterUnion = Field(default_factory=FilterAllModel)
    adjacency: AdjacencyUnion = Field(default_factory=AdjacencyWayModel)
    analysis: AnalysisModel = AnalysisModel()
    log: LogModel = LogModel()
