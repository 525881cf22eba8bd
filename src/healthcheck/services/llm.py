from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from openai import OpenAI

from ..config import Settings
from ..errors import ConfigurationError, RequestError
from ..schemas.inputs import HealthCheckInputs
from ..schemas.report import HealthCheckReport, parse_report, response_schema
from .prompt import build_messages

logger = logging.getLogger(__name__)


def response_format() -> Dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "health_check_report",
            "strict": True,
            "schema": response_schema(),
        },
    }


class ReportRequester:
    """Turns a set of KPIs into a :class:`HealthCheckReport` with one model call.

    The API key and endpoint are given explicitly; ``client`` may be any object
    exposing ``chat.completions.create`` (tests pass a mock). Without a client
    one is built on first use, so a missing key is reported before any network
    activity.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        temperature: float = 0.3,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.temperature = temperature
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, client: Any = None) -> "ReportRequester":
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            base_url=settings.base_url,
            timeout=settings.timeout,
            temperature=settings.temperature,
            client=client,
        )

    def _get_client(self):
        if self._client is None:
            # No retries: one outbound call per generation.
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def generate(self, inputs: HealthCheckInputs) -> HealthCheckReport:
        if not self.api_key:
            logger.error("No API key configured for the report provider")
            raise ConfigurationError()

        messages = build_messages(inputs)
        logger.info("Requesting health check report from %s", self.model)
        try:
            resp = self._get_client().chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                response_format=response_format(),
            )
            content = resp.choices[0].message.content
            if not content or not content.strip():
                raise ValueError("No response from AI")
            report = parse_report(content)
        except Exception as e:
            logger.exception("Error generating report: %s", e)
            raise RequestError() from e

        logger.info(
            "Report generated: score=%s level=%s kpis=%d",
            report.overall_score,
            report.overall_maturity_level.value,
            len(report.kpi_analyses),
        )
        return report
