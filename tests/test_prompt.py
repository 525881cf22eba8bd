import json

from healthcheck.schemas.inputs import HealthCheckInputs
from healthcheck.schemas.report import MaturityLevel
from healthcheck.services.prompt import PHASES, build_messages


def test_roles():
    messages = build_messages(HealthCheckInputs())
    assert [m["role"] for m in messages] == ["system", "user"]


def test_inputs_embedded_as_json():
    inputs = HealthCheckInputs.model_validate({"backlog": 400, "avgLoginFrequency": "Giornaliera"})
    user = build_messages(inputs)[1]["content"]
    dump = json.dumps(inputs.to_wire(), indent=2, ensure_ascii=False)
    assert dump in user
    assert '"backlog": 400' in user
    assert '"mttr": null' in user
    assert "Giornaliera" in user


def test_policy_and_plan():
    user = build_messages(HealthCheckInputs())[1]["content"]
    for phase in PHASES:
        assert phase in user
    for level in MaturityLevel:
        assert level.value in user
    assert "backlog" in user.lower()
    assert "preventiva" in user
    assert "qualità dei dati" in user
    assert "30/60/90" in user
