from pathlib import Path
import asyncio
import json
import sys

import httpx
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from careerpath.client.dispatcher import ApiClient, ApiError, api_request
from careerpath.client.forms import (
    submit_career_analysis,
    submit_learning_path,
    submit_resource_recommendations,
)
from careerpath.client.mutations import MutationStatus, resource_recommendations_mutation


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)


def _client(recorder: Recorder) -> ApiClient:
    return ApiClient("http://testserver/api", user_id="user-1", transport=httpx.MockTransport(recorder))


def test_api_request_sends_json_body_and_parses_response():
    recorder = Recorder(body={"ok": True})
    with httpx.Client(transport=httpx.MockTransport(recorder)) as client:
        result = api_request("POST", "http://testserver/api/xgen/render", {"report": {}}, client=client)

    assert result == {"ok": True}
    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"report": {}}


def test_api_request_without_body_sends_no_content_type():
    recorder = Recorder(body=[])
    with httpx.Client(transport=httpx.MockTransport(recorder)) as client:
        api_request("GET", "http://testserver/api/skills", client=client)

    assert "Content-Type" not in recorder.requests[0].headers


@pytest.mark.parametrize(
    "recorder, expected",
    [
        (Recorder(400, {"message": "Missing required fields: state"}), "400: Missing required fields: state"),
        (Recorder(404, {"detail": "Role not found"}), "404: Role not found"),
        (Recorder(429, {"detail": {"message": "Too many requests"}}), "429: Too many requests"),
        (Recorder(502, text="upstream exploded"), "502: upstream exploded"),
        (Recorder(500, text=""), "500: Internal Server Error"),
    ],
)
def test_non_2xx_raises_api_error_with_status_prefix(recorder, expected):
    with httpx.Client(transport=httpx.MockTransport(recorder)) as client:
        with pytest.raises(ApiError) as exc_info:
            api_request("GET", "http://testserver/api/anything", client=client)

    assert str(exc_info.value) == expected
    assert exc_info.value.status == recorder.status_code


def test_recommendations_mutation_walks_stages_and_toasts():
    recorder = Recorder(body={"Python": [{"id": "resource-1", "title": "Intro"}]})
    toasts = []
    mutation = resource_recommendations_mutation(_client(recorder), notify=toasts.append, delay_scale=0)

    result = asyncio.run(mutation.run({"skills": [], "maxResults": 5}))

    assert result == {"Python": [{"id": "resource-1", "title": "Intro"}]}
    assert mutation.status is MutationStatus.SUCCESS
    assert mutation.stages == ["initial", "searching", "verifying"]
    assert [toast.title for toast in toasts] == ["Finding Resources", "Verifying Results", "Recommendations Retrieved"]
    assert len(recorder.requests) == 1
    assert recorder.requests[0].url.path == "/api/learning-resources"
    assert recorder.requests[0].headers["X-User-Id"] == "user-1"


def test_failed_request_sets_error_state_and_error_toast():
    recorder = Recorder(502, {"detail": "Failed to get learning resources: provider down"})
    toasts = []
    mutation = resource_recommendations_mutation(_client(recorder), notify=toasts.append, delay_scale=0)

    result = asyncio.run(mutation.run({"skills": []}))

    assert result is None
    assert mutation.status is MutationStatus.ERROR
    assert mutation.stages == ["initial", "searching"]
    assert toasts[-1].title == "Error Getting Recommendations"
    assert toasts[-1].description == "502: Failed to get learning resources: provider down"
    assert toasts[-1].variant == "destructive"

    mutation.reset()
    assert mutation.status is MutationStatus.IDLE
    assert mutation.error is None


def test_invalid_form_never_reaches_the_network():
    recorder = Recorder(body={})
    data = {"skill": "P", "currentLevel": "beginner", "targetLevel": "advanced", "context": "Long enough context"}

    outcome = asyncio.run(submit_resource_recommendations(_client(recorder), data, delay_scale=0))

    assert outcome.submitted is False
    assert outcome.errors == {"skill": "Skill name must be at least 2 characters"}
    assert recorder.requests == []


def test_learning_path_form_runs_all_cosmetic_stages():
    recorder = Recorder(body={"skill": "SQL", "description": "Path", "recommendedSequence": []})
    data = {"skill": "SQL", "currentLevel": "beginner", "targetLevel": "advanced", "context": "Reporting for my team"}

    outcome = asyncio.run(submit_learning_path(_client(recorder), data, delay_scale=0))

    assert outcome.ok
    assert outcome.mutation.stages == ["initial", "creating", "reviewing", "finalizing"]
    assert json.loads(recorder.requests[0].content)["skill"] == "SQL"


def test_career_analysis_form_posts_camel_case_payload():
    recorder = Recorder(body={"message": "Career analysis completed successfully", "report": {}, "source": "sample"})
    data = {
        "professionalLevel": "Junior",
        "currentSkills": "Excel, SQL",
        "educationalBackground": "BA Economics",
        "careerHistory": "Analyst at Initech",
        "desiredRole": "Data Analyst",
        "state": "Ontario",
        "country": "Canada",
    }

    outcome = asyncio.run(submit_career_analysis(_client(recorder), data, delay_scale=0))

    assert outcome.ok
    assert outcome.data["source"] == "sample"
    assert outcome.mutation.stage == "complete"
    assert json.loads(recorder.requests[0].content) == data
    assert recorder.requests[0].url.path == "/api/xgen/analyze"
