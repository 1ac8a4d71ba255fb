import json
from types import SimpleNamespace

import pytest

from aquatrace.summary import gemini_summary
from aquatrace.summary.gemini_summary import (
    FALLBACK_RESULT, AnalysisResult, analyze_water_data, build_prompt, get_client, summary_payload
)


class FakeModels:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return SimpleNamespace(text=item)


class FakeClient:
    def __init__(self, *responses):
        self.models = FakeModels(responses)


ANSWER = json.dumps({
    "summary": "روند کلی پایدار است.",
    "anomalies": ["B"],
    "recommendations": ["نمونه‌برداری مجدد از B"],
}, ensure_ascii=False)


@pytest.fixture
def samples(make_samples):
    return make_samples([
        ("p1", "A", 100, 2.0), ("p1", "B", 300, 4.0),
        ("p2", "A", 200, 3.0),
    ])


def test_summary_payload_per_period(samples):
    payload = summary_payload(samples)
    assert payload == [
        {"date": "p1", "count": 2, "averages": {"ec": 200.0, "nitrate": 3.0}},
        {"date": "p2", "count": 1, "averages": {"ec": 200.0, "nitrate": 3.0}},
    ]


def test_build_prompt_embeds_payload(samples):
    prompt = build_prompt(samples)
    assert "فارسی" in prompt
    data = json.loads(prompt.split("Data: ", 1)[1])
    assert [p["date"] for p in data] == ["p1", "p2"]


def test_analyze_water_data_parses_structured_answer(samples):
    client = FakeClient(ANSWER)
    result = analyze_water_data(samples, client=client, model="test-model")

    assert result == AnalysisResult(
        summary="روند کلی پایدار است.",
        anomalies=["B"],
        recommendations=["نمونه‌برداری مجدد از B"],
    )
    assert not result.fallback
    call = client.models.calls[0]
    assert call["model"] == "test-model"
    assert call["config"].response_mime_type == "application/json"


@pytest.mark.parametrize("response", [
    RuntimeError("connection reset"),
    "not json at all",
    json.dumps({"summary": "only a summary"}),
    json.dumps({"summary": 1, "anomalies": [], "recommendations": []}),
    json.dumps(["a", "list"]),
    "",
])
def test_analyze_water_data_falls_back_on_failure(samples, response):
    result = analyze_water_data(samples, client=FakeClient(response))
    assert result is FALLBACK_RESULT
    assert result.fallback
    assert result.anomalies == []


def test_analyze_water_data_nothing_to_summarize(samples):
    client = FakeClient(ANSWER)
    assert analyze_water_data(samples.iloc[0:0], client=client) is None
    assert client.models.calls == []


def test_transient_errors_are_retried(samples, monkeypatch):
    monkeypatch.setattr(gemini_summary.time, "sleep", lambda seconds: None)
    client = FakeClient(RuntimeError("503 UNAVAILABLE: model overloaded"), ANSWER)

    result = analyze_water_data(samples, client=client)

    assert not result.fallback
    assert len(client.models.calls) == 2


def test_transient_errors_give_up_after_retries(samples, monkeypatch):
    monkeypatch.setattr(gemini_summary.time, "sleep", lambda seconds: None)
    client = FakeClient(*[RuntimeError("503 overloaded")] * 3)

    assert analyze_water_data(samples, client=client) is FALLBACK_RESULT
    assert len(client.models.calls) == 3


def test_missing_api_key(samples, monkeypatch):
    for name in ("GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)
    with pytest.raises(RuntimeError):
        get_client()
    assert analyze_water_data(samples) is FALLBACK_RESULT


@pytest.mark.parametrize("retries", [0, -1])
def test_retry_helper_requires_an_attempt(retries):
    client = FakeClient(ANSWER)
    with pytest.raises(ValueError):
        gemini_summary.call_gemini_with_retry(client, "test-model", "prompt", retries=retries)
    assert client.models.calls == []
