"""JSON API for the health check.

Endpoints (mounted under ``/api``):

- ``GET  /fields``         form catalogue (sections, labels, units, options)
- ``PUT  /fields/<name>``  set one input of the session's form
- ``GET  /state``          session form state (inputs, state, error, report)
- ``POST /generate``       generate a report from the session's inputs
- ``POST /reset``          discard the session's report, keep the inputs
- ``POST /report``         stateless: ``{"inputs": {...}}`` in, report out

Notes
-----
- Provider failures surface only the fixed user-facing message; details go to
  the log.
- Field errors are 400, a generation already in flight is 409, provider
  failures are 502.
"""

from __future__ import annotations

import logging

from flask import Blueprint, request
from pydantic import ValidationError

from ..errors import ControllerBusyError, FieldError, RequestError
from ..schemas.inputs import HealthCheckInputs
from . import get_services, remember_inputs, session_controller

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)
# -----------------------------------------------------------------------------
# Router
# -----------------------------------------------------------------------------
router = Blueprint("api", __name__)


def _error(message: str, status: int, **extra):
    body = {"status": "error", "error": message}
    body.update(extra)
    return body, status


# =============================================================================
# Form catalogue
# =============================================================================
@router.route("/fields", methods=["GET"])
def fields():
    return get_services().catalogue.model_dump()


@router.route("/fields/<name>", methods=["PUT"])
def set_field(name: str):
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or "value" not in payload:
        return _error("Request body must be an object with a 'value' key.", 400)

    _, controller = session_controller()
    try:
        controller.set_field(name, payload["value"])
    except FieldError as e:
        return _error(str(e), 400, field=e.name)
    remember_inputs(controller)
    return {"status": "success", "inputs": controller.inputs.to_wire()}


# =============================================================================
# Session form state
# =============================================================================
@router.route("/state", methods=["GET"])
def state():
    _, controller = session_controller()
    return controller.snapshot()


@router.route("/generate", methods=["POST"])
def generate():
    _, controller = session_controller()
    try:
        report = controller.generate()
    except ControllerBusyError as e:
        return _error(str(e), 409)
    if report is None:
        return _error(controller.error, 502, state=controller.snapshot())
    return controller.snapshot()


@router.route("/reset", methods=["POST"])
def reset():
    _, controller = session_controller()
    controller.reset()
    return controller.snapshot()


# =============================================================================
# Stateless report
# =============================================================================
@router.route("/report", methods=["POST"])
def report():
    payload = request.get_json(silent=True) or {}
    raw_inputs = payload.get("inputs") if isinstance(payload, dict) else None
    if not isinstance(raw_inputs, dict):
        return _error("Request body must include an 'inputs' object.", 400)

    try:
        inputs = HealthCheckInputs.model_validate(raw_inputs)
    except ValidationError as e:
        return _error("Invalid inputs.", 400, details=e.errors(include_url=False, include_context=False))

    try:
        result = get_services().requester.generate(inputs)
    except RequestError as e:
        return _error(e.user_message, 502)

    logger.info("Stateless report generated (score=%s)", result.overall_score)
    return {"status": "success", "report": result.to_wire()}
