"""FastAPI Web application — path building and traversal preview."""

from __future__ import annotations

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from trackpath import __version__
from trackpath.config import TrackPathSettings
from trackpath.track.errors import TrackPathError
from trackpath.web.schemas import (
    BuildRequest,
    BuildResponse,
    DiagnosticModel,
    HealthResponse,
    KnotModel,
    PointModel,
    SimulateRequest,
    SimulateResponse,
)
from trackpath.web.service import PathService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="Track Path", version=__version__)


def _service() -> PathService:
    return PathService(TrackPathSettings.from_env())


def _point(v) -> PointModel:
    return PointModel(x=v.x, y=v.y, z=v.z)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.post("/api/paths/build", response_model=BuildResponse)
def build_path(req: BuildRequest) -> BuildResponse:
    """Order the waypoints, fit the curve and report diagnostics."""
    try:
        result, _, total_length = _service().build(req)
    except (TrackPathError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return BuildResponse(
        closed=result.path.closed,
        points=[_point(p) for p in result.path.points],
        knots=[
            KnotModel(
                position=_point(k.position),
                tangent_in=_point(k.tangent_in),
                tangent_out=_point(k.tangent_out),
            )
            for k in result.knots
        ],
        total_length=total_length,
        guard_violated=result.path.guard_violated,
        diagnostics=[
            DiagnosticModel(code=d.code.value, message=d.message, distance=d.distance)
            for d in result.diagnostics
        ],
    )


@app.post("/api/paths/simulate", response_model=SimulateResponse)
def simulate_path(req: SimulateRequest) -> SimulateResponse:
    """Build the path and drive a follower over it for ``ticks`` steps."""
    try:
        total_length, finished, poses = _service().simulate(req)
    except (TrackPathError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return SimulateResponse(total_length=total_length, finished=finished, poses=poses)
