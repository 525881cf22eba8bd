r"""Form state for one user: inputs, the current report, loading flag and error.

States::

    idle(inputs[, error]) --generate--> loading(inputs) --ok--> ready(inputs, report)
    ready(inputs, report) --generate-/                   \--fail--> idle(inputs, error)
    ready --reset--> idle

Starting a generation discards the previous report, so a failed attempt never
leaves a report that no longer matches the inputs. A second ``generate()``
while one is in flight is rejected with :class:`ControllerBusyError`.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..errors import ControllerBusyError, RequestError, UNEXPECTED_FAILURE_MESSAGE
from ..schemas.inputs import HealthCheckInputs
from ..schemas.report import HealthCheckReport

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class FormController:
    def __init__(self, requester, inputs: Optional[HealthCheckInputs] = None):
        self._requester = requester
        self._inputs = inputs or HealthCheckInputs()
        self._report: Optional[HealthCheckReport] = None
        self._loading = False
        self._error: Optional[str] = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    @property
    def inputs(self) -> HealthCheckInputs:
        return self._inputs

    @property
    def report(self) -> Optional[HealthCheckReport]:
        return self._report

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def state(self) -> FormState:
        if self._loading:
            return FormState.LOADING
        if self._report is not None:
            return FormState.READY
        return FormState.IDLE

    # ------------------------------------------------------------------
    def set_field(self, name: str, value: Any) -> HealthCheckInputs:
        # Raises UnknownFieldError / InvalidFieldValueError; inputs stay as they were.
        self._inputs = self._inputs.with_field(name, value)
        return self._inputs

    def set_fields(self, values: Dict[str, Any]) -> HealthCheckInputs:
        # All or nothing: one bad value leaves every input untouched.
        self._inputs = self._inputs.with_fields(values)
        return self._inputs

    def generate(self) -> Optional[HealthCheckReport]:
        with self._lock:
            if self._loading:
                raise ControllerBusyError()
            self._loading = True
            self._error = None
            self._report = None
            inputs = self._inputs
        logger.debug("Controller %s: -> loading", id(self))

        report: Optional[HealthCheckReport] = None
        error: Optional[str] = None
        try:
            report = self._requester.generate(inputs)
        except RequestError as e:
            error = e.user_message
        except Exception:
            logger.exception("Unexpected failure while generating report")
            error = UNEXPECTED_FAILURE_MESSAGE
        finally:
            # Report and flag change together so no reader sees idle mid-transition.
            with self._lock:
                self._report = report
                self._error = error
                self._loading = False

        if report is None:
            logger.debug("Controller %s: loading -> idle (%s)", id(self), error)
        else:
            logger.debug("Controller %s: loading -> ready", id(self))
        return report

    def reset(self) -> None:
        self._report = None
        self._error = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "loading": self._loading,
            "error": self._error,
            "inputs": self._inputs.to_wire(),
            "report": self._report.to_wire() if self._report is not None else None,
        }


class ControllerRegistry:
    """In-memory controllers keyed by session token, least recently used evicted first.

    Controllers are local to one process. A token this process does not know
    (another worker, an evicted entry) gets a fresh controller, seeded with
    ``inputs`` when the caller still has them.
    """

    def __init__(self, factory: Callable[[Optional[HealthCheckInputs]], FormController], capacity: int = 256):
        self._factory = factory
        self._capacity = max(1, capacity)
        self._controllers: "OrderedDict[str, FormController]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._controllers)

    def get(
        self, token: Optional[str], inputs: Optional[HealthCheckInputs] = None
    ) -> tuple[str, FormController]:
        """Return ``(token, controller)``, creating both when the token is unknown."""
        with self._lock:
            if token and token in self._controllers:
                self._controllers.move_to_end(token)
                return token, self._controllers[token]

            token = uuid.uuid4().hex
            controller = self._factory(inputs)
            self._controllers[token] = controller
            while len(self._controllers) > self._capacity:
                evicted, _ = self._controllers.popitem(last=False)
                logger.info("Evicted form session %s", evicted)
            return token, controller
