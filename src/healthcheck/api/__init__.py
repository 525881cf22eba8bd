"""Helpers shared by the HTML and JSON blueprints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from flask import current_app, session
from pydantic import ValidationError

from ..config import Settings
from ..schemas.form import FormCatalogue
from ..schemas.inputs import HealthCheckInputs
from ..services.controller import ControllerRegistry, FormController
from ..services.llm import ReportRequester

logger = logging.getLogger(__name__)

SESSION_KEY = "form_id"
INPUTS_KEY = "form_inputs"


@dataclass
class HealthCheckServices:
    settings: Settings
    requester: ReportRequester
    catalogue: FormCatalogue
    registry: ControllerRegistry


def get_services() -> HealthCheckServices:
    return current_app.extensions["healthcheck"]


def _saved_inputs() -> Optional[HealthCheckInputs]:
    stored = session.get(INPUTS_KEY)
    if not stored:
        return None
    try:
        return HealthCheckInputs.model_validate(stored)
    except ValidationError:
        logger.warning("Discarding unreadable form inputs stored in the session")
        return None


def session_controller() -> Tuple[str, FormController]:
    """Controller bound to the caller's session, created on first use.

    The inputs also travel in the signed session cookie, so a process that has
    never seen this session (another Lambda environment, an evicted entry)
    rebuilds the form from them. Reports stay in the process that made them.
    """
    token, controller = get_services().registry.get(session.get(SESSION_KEY), _saved_inputs())
    session[SESSION_KEY] = token
    return token, controller


def remember_inputs(controller: FormController) -> None:
    session[INPUTS_KEY] = controller.inputs.to_wire()
