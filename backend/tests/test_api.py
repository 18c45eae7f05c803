import pytest

from api.dependencies import get_settings
from api.router import limiter
from main import app
from services import gemini_client
from services.errors import ProviderHTTPError

RESUME = "Python developer with React and Docker skills. Built REST APIs."
JD = "Looking for a Python developer with React experience, Docker and AWS."


@pytest.fixture
def provider(monkeypatch):
    """Stub the Gemini call; tests set the reply or an exception to raise."""
    state = {"reply": '{"matchScore": 75, "tips": []}', "raises": None, "calls": 0}

    async def fake_generate_text(prompt, **kwargs):
        state["calls"] += 1
        if state["raises"] is not None:
            raise state["raises"]
        return state["reply"]

    monkeypatch.setattr(gemini_client, "generate_text", fake_generate_text)
    return state


def _post(client, **body):
    return client.post("/api/analyze", json=body)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["gemini_configured"] is True


def test_analyze_success(client, provider):
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 200
    assert response.json() == {"matchScore": 75, "tips": []}


def test_analyze_relays_fenced_reply(client, provider):
    provider["reply"] = '```json\n{"matchScore":80}\n```'
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 200
    assert response.json() == {"matchScore": 80}


def test_analyze_recovers_prose_wrapped_reply(client, provider):
    provider["reply"] = 'Sure! {"matchScore":50,"tips":[]} Hope this helps.'
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 200
    assert response.json() == {"matchScore": 50, "tips": []}


def test_analyze_rejects_get(client):
    response = client.get("/api/analyze")
    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


def test_analyze_empty_resume(client, provider):
    response = _post(client, resume="", jobDescription=JD)
    assert response.status_code == 400
    assert "resume" in response.json()["error"]
    assert provider["calls"] == 0


def test_analyze_missing_fields(client, provider):
    response = _post(client)
    assert response.status_code == 400
    error = response.json()["error"]
    assert "resume" in error
    assert "jobDescription" in error


def test_analyze_null_field(client, provider):
    response = _post(client, resume=RESUME, jobDescription=None)
    assert response.status_code == 400
    assert "jobDescription" in response.json()["error"]


def test_analyze_invalid_json_body(client, provider):
    response = client.post(
        "/api/analyze", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_analyze_job_description_too_long(client, provider):
    response = _post(client, resume=RESUME, jobDescription="x" * 10001)
    assert response.status_code == 400
    assert "too long" in response.json()["error"]


def test_analyze_missing_credential(client, provider, make_settings):
    app.dependency_overrides[get_settings] = lambda: make_settings(gemini_api_key="")
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 500
    assert "API key not configured" in response.json()["error"]
    assert provider["calls"] == 0


def test_analyze_credential_not_leaked(client, provider, settings):
    provider["reply"] = "no json at all"
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert settings.gemini_api_key not in response.text


def test_analyze_unparseable_reply_includes_excerpt(client, provider):
    provider["reply"] = "I cannot produce JSON today."
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to parse AI response. Please try again."
    assert data["rawExcerpt"] == "I cannot produce JSON today."


def test_analyze_unparseable_reply_without_diagnostics(client, provider, make_settings):
    app.dependency_overrides[get_settings] = lambda: make_settings(expose_diagnostics=False)
    provider["reply"] = "I cannot produce JSON today."
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 500
    assert "rawExcerpt" not in response.json()


def test_analyze_provider_error(client, provider):
    provider["raises"] = ProviderHTTPError("API key not valid. Please pass a valid API key.", 400)
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 500
    assert response.json() == {"error": "API key not valid. Please pass a valid API key."}


def test_analyze_unexpected_error(client, provider):
    provider["raises"] = ValueError("boom")
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 500
    assert response.json() == {"error": "Analysis failed. Please try again."}


def test_analyze_without_body_names_missing_fields(client, provider):
    response = client.post("/api/analyze")
    assert response.status_code == 400
    error = response.json()["error"]
    assert "resume" in error
    assert "jobDescription" in error
    assert provider["calls"] == 0


def test_analyze_non_finite_reply_reported_as_parse_failure(client, provider):
    provider["reply"] = '{"matchScore": NaN, "tips": []}'
    response = _post(client, resume=RESUME, jobDescription=JD)
    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to parse AI response. Please try again."
    assert data["rawExcerpt"] == '{"matchScore": NaN, "tips": []}'


class TestRateLimit:
    def setup_method(self):
        limiter.reset()

    def teardown_method(self):
        limiter.reset()

    def test_requests_over_limit_rejected(self, client, provider):
        limiter.enabled = True
        for _ in range(10):
            assert _post(client, resume=RESUME, jobDescription=JD).status_code == 200

        response = _post(client, resume=RESUME, jobDescription=JD)
        assert response.status_code == 429
        assert response.json()["error"].startswith("Rate limit exceeded")
        assert provider["calls"] == 10

    def test_limit_not_applied_when_disabled(self, client, provider):
        for _ in range(12):
            assert _post(client, resume=RESUME, jobDescription=JD).status_code == 200
        assert provider["calls"] == 12
