import json

import httpx
import pytest

from mentor.client import ChatSession
from mentor.core.errors import ProviderError, RATE_LIMIT_MESSAGE

ENDPOINT = "http://mentor.test/api/ai-chat"


def _session(handler):
    return ChatSession(endpoint=ENDPOINT, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_history_is_replayed_on_next_request():
    seen = []

    def handler(request):
        body = json.loads(request.content)
        seen.append(body)
        return httpx.Response(200, json={"response": f"echo {body['message']}", "success": True})

    session = _session(handler)
    assert session.send("first") == "echo first"
    assert session.send("second") == "echo second"

    assert seen[0] == {"message": "first", "conversationHistory": []}
    assert seen[1]["conversationHistory"] == [
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "echo first"},
    ]
    assert len(session.history) == 4


def test_failed_generation_still_shows_friendly_text():
    def handler(request):
        return httpx.Response(
            500,
            json={"error": "quota", "response": RATE_LIMIT_MESSAGE, "success": False},
        )

    session = _session(handler)
    assert session.send("hi") == RATE_LIMIT_MESSAGE
    assert session.history[-1] == {"role": "assistant", "content": RATE_LIMIT_MESSAGE}


def test_error_body_without_reply_leaves_history_untouched():
    def handler(request):
        return httpx.Response(500, json={"error": "GEMINI_API_KEY is not configured"})

    session = _session(handler)
    assert session.send("hi") == "Error: GEMINI_API_KEY is not configured"
    assert session.history == []


def test_transport_failure_raises_runtime_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    session = _session(handler)
    with pytest.raises(RuntimeError, match="Chat API call failed"):
        session.send("hi")
    assert session.history == []


def test_non_json_body_raises_runtime_error():
    session = _session(lambda request: httpx.Response(502, text="Bad Gateway"))
    with pytest.raises(RuntimeError, match="status 502"):
        session.send("hi")


def test_round_trip_against_app(client, stub):
    session = ChatSession(endpoint="/api/ai-chat", client=client)
    assert session.send("hello") == "Hello!"
    stub.error = ProviderError("fetch failed")
    session.send("again")

    assert "Conversation History:\nUser: hello\nAssistant: Hello!" in stub.prompts[1]
    assert len(session.history) == 4
