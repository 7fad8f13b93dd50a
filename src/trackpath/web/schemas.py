"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PointModel(BaseModel):
    x: float
    y: float
    z: float = 0.0


class BuildRequest(BaseModel):
    points: list[PointModel]
    closed: bool = True
    start: PointModel | None = None
    max_link_distance: float | None = Field(default=None, gt=0)
    direction_bias: float | None = Field(default=None, ge=0, le=1)
    refinement_passes: int | None = Field(default=None, ge=0)
    handle_tightness: float | None = Field(default=None, ge=0, le=1)
    guard_policy: str | None = None


class LaneStep(BaseModel):
    tick: int = Field(ge=0)
    step: int = Field(ge=-1, le=1)


class SimulateRequest(BuildRequest):
    speed: float | None = None
    loop: bool = False
    dt: float = Field(default=1.0 / 60.0, gt=0)
    ticks: int = Field(default=600, ge=1, le=100_000)
    lane_steps: list[LaneStep] = []


class HealthResponse(BaseModel):
    status: str
    version: str


class KnotModel(BaseModel):
    position: PointModel
    tangent_in: PointModel
    tangent_out: PointModel


class DiagnosticModel(BaseModel):
    code: str
    message: str
    distance: float | None = None


class BuildResponse(BaseModel):
    closed: bool
    points: list[PointModel]
    knots: list[KnotModel]
    total_length: float
    guard_violated: bool
    diagnostics: list[DiagnosticModel]


class PoseRecord(BaseModel):
    tick: int
    x: float
    y: float
    z: float
    distance: float
    lane_index: int
    lateral_offset: float


class SimulateResponse(BaseModel):
    total_length: float
    finished: bool
    poses: list[PoseRecord]
