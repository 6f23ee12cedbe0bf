"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from networth_planner.core.inflation import parse_inflation_schedule
from networth_planner.core.planning import plan_for_horizon
from networth_planner.core.projection import simulate
from networth_planner.core.sensitivity import sensitivity_grid
from networth_planner.domain.reporting import projection_csv, summarize
from networth_planner.models import SimulationParameters, ValueModel
from networth_planner.schemas.ping import PingResponse
from networth_planner.schemas.projection import (
    InflationParseRequest,
    InflationParseResponse,
    PlanRequest,
    ProjectionResponse,
)
from networth_planner.storage import InputSnapshot, SnapshotStore

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

CSV_FILENAME = "networth_projection.csv"


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _store() -> SnapshotStore:
    return current_app.extensions["snapshot_store"]


def _json(model: ValueModel) -> Response:
    # non-finite balances are written as null
    return current_app.response_class(
        model.model_dump_json(by_alias=True), mimetype="application/json"
    )


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_input=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", service="networth-planner")
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Month-by-month projection with the summary figures."""
    params = SimulationParameters.model_validate(_payload())
    result = simulate(params)
    response = ProjectionResponse.from_result(result, summarize(result))
    return _json(response)


@api_bp.post("/projection/csv")
def projection_export() -> Response:
    params = SimulationParameters.model_validate(_payload())
    body = projection_csv(simulate(params))
    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
    )


@api_bp.post("/plan")
def plan() -> Any:
    """Contribution and return rate needed to hit the target by the desired horizon."""
    payload = PlanRequest.model_validate(_payload())
    result = plan_for_horizon(payload.parameters(), payload.desired_horizon_years)
    logger.info(
        "Plan for %.2f years: contribution=%.2f rate=%s",
        result.desired_horizon_years,
        result.required_contribution,
        "none" if result.required_rate is None else f"{result.required_rate:.6f}",
    )
    return _json(result)


@api_bp.post("/sensitivity")
def sensitivity() -> Any:
    params = SimulationParameters.model_validate(_payload())
    return _json(sensitivity_grid(params))


@api_bp.post("/inflation/parse")
def parse_inflation() -> Any:
    payload = InflationParseRequest.model_validate(_payload())
    response = InflationParseResponse(schedule=parse_inflation_schedule(payload.text))
    return _json(response)


@api_bp.get("/snapshot")
def get_snapshot() -> Any:
    return _json(_store().load())


@api_bp.put("/snapshot")
def put_snapshot() -> Any:
    snapshot = InputSnapshot.model_validate(_payload())
    _store().save(snapshot)
    return _json(snapshot)


@api_bp.delete("/snapshot")
def delete_snapshot() -> Any:
    _store().clear()
    return "", HTTPStatus.NO_CONTENT
