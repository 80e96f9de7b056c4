import pytest
import requests

from agents.llm_client import ChatCompletionClient, CollaboratorError
from agents.web_search import WebSearchAgent


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def completion(content):
    return {"choices": [{"message": {"content": content}}]}


def make_client(session):
    return ChatCompletionClient("key-123", base_url="https://llm.example/api/v1/", timeout=5, session=session)


def test_requires_api_key():
    with pytest.raises(ValueError):
        ChatCompletionClient("")


def test_complete_returns_message_content():
    session = FakeSession(FakeResponse(payload=completion("[]")))
    client = make_client(session)
    assert client.complete("model-x", "sys", "user", temperature=0.7, max_tokens=100) == "[]"

    sent = session.requests[0]
    assert sent["url"] == "https://llm.example/api/v1/chat/completions"
    assert sent["timeout"] == 5
    assert sent["headers"]["Authorization"] == "Bearer key-123"
    assert sent["json"]["model"] == "model-x"
    assert sent["json"]["max_tokens"] == 100
    assert sent["json"]["messages"][0] == {"role": "system", "content": "sys"}


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("refused")),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(FakeResponse(status_code=503, text="overloaded")),
        FakeSession(FakeResponse(payload=None)),
        FakeSession(FakeResponse(payload={"choices": []})),
        FakeSession(FakeResponse(payload=completion(""))),
        FakeSession(FakeResponse(payload=completion([{"type": "text", "text": "[]"}]))),
        FakeSession(FakeResponse(payload=completion(42))),
    ],
)
def test_failures_raise_collaborator_error(session):
    with pytest.raises(CollaboratorError):
        make_client(session).complete("model-x", "sys", "user")
    assert len(session.requests) == 1


def test_web_search_parses_listings():
    session = FakeSession(FakeResponse(payload=completion('[{"id": "p1", "title": "Phone"}]')))
    agent = WebSearchAgent(make_client(session), "search-model")
    assert agent.search("gaming phone") == [{"id": "p1", "title": "Phone"}]
    assert "gaming phone" in session.requests[0]["json"]["messages"][1]["content"]
