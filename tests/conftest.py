from __future__ import annotations

import copy
import json
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from healthcheck import create_app
from healthcheck.config import Settings
from healthcheck.services.llm import ReportRequester


SAMPLE_REPORT = {
    "executiveSummary": "Il CMMS è usato in modo discontinuo: backlog alto e poca preventiva.",
    "overallMaturityLevel": "Livello 2 – Intermedio",
    "overallScore": 48,
    "kpiAnalyses": [
        {"kpi": "Backlog", "value": "400 WO", "evaluation": "Critico", "score": 1,
         "notes": "Backlog pari a oltre tre mesi di lavoro."},
        {"kpi": "% Manutenzione Preventiva", "value": "10%", "evaluation": "Attenzione", "score": 2,
         "notes": "Quota di preventiva molto sotto il benchmark del 60%."},
        {"kpi": "MTTR", "value": "4 h", "evaluation": "Buono", "score": 4,
         "notes": "In linea con il settore."},
    ],
    "recommendations": [
        {"category": "Backlog", "suggestion": "Rivedere settimanalmente i WO aperti."},
        {"category": "Preventiva", "suggestion": "Pianificare i piani di manutenzione sugli asset critici."},
        {"category": "Dati", "suggestion": "Completare l'anagrafica degli asset."},
        {"category": "Adozione", "suggestion": "Formare i tecnici all'app mobile."},
        {"category": "Automazione", "suggestion": "Attivare le notifiche automatiche sugli SLA."},
    ],
    "quickWins": [
        "Chiudere i WO già completati ma non registrati.",
        "Introdurre una checklist standard per le ispezioni.",
    ],
    "strategy90Days": [
        {"phase": "30 giorni", "action": "Stabilizzazione", "details": "Ridurre il backlog del 30%."},
        {"phase": "60 giorni", "action": "Ottimizzazione", "details": "Portare la preventiva al 40%."},
        {"phase": "90 giorni", "action": "Automazione", "details": "Attivare 5 regole automatiche."},
    ],
}


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def make_completion():
    """Build an object shaped like an OpenAI chat completion response."""
    return _completion


@pytest.fixture
def report_payload():
    return copy.deepcopy(SAMPLE_REPORT)


@pytest.fixture
def fake_client(report_payload):
    client = Mock()
    client.chat.completions.create.return_value = _completion(json.dumps(report_payload))
    return client


@pytest.fixture
def requester(fake_client):
    return ReportRequester(api_key="test-key", model="test-model", client=fake_client)


@pytest.fixture
def settings():
    return Settings(api_key="test-key", model="test-model", secret_key="test-secret", max_sessions=8)


@pytest.fixture
def app(settings, requester):
    flask_app = create_app(settings=settings, requester=requester)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
