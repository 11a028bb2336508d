"""
Chat relay endpoint tests.

Covers the whole pipeline through the HTTP surface: configuration check,
validation, upstream outcome classification and response normalization.
"""
import uuid

import aiohttp
import pytest

from conftest import API_KEY, API_VERSION, ENDPOINT, make_settings

CHAT_URL = "/kea/v1/chat"


def test_chat_relays_and_normalizes(client, fake_upstream, chat_payload):
    fake = fake_upstream(
        body={
            "choices": [{"message": {"content": "hi"}, "finish_reason": "length"}],
            "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
        }
    )

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["model"] == "my-gpt-4o"
    assert data["choices"] == [
        {"index": 0, "message": {"role": "assistant", "content": "hi"}, "finish_reason": "length"}
    ]
    assert data["usage"] == {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4}

    # Correlation id in body and header
    assert response.headers["X-Request-Id"] == data["requestId"]
    uuid.UUID(data["requestId"])

    assert len(fake.calls) == 1


def test_chat_forwards_without_model_field(client, fake_upstream, chat_payload):
    fake = fake_upstream(body={})

    client.post(CHAT_URL, json=chat_payload)

    call = fake.calls[0]
    assert "model" not in call["payload"]
    assert call["payload"] == {
        "messages": chat_payload["messages"],
        "max_tokens": 128,
    }
    assert call["url"] == (
        f"{ENDPOINT}/openai/deployments/my-gpt-4o/chat/completions?api-version={API_VERSION}"
    )
    assert call["headers"]["api-key"] == API_KEY
    assert call["headers"]["Content-Type"] == "application/json"


def test_chat_empty_upstream_object_gets_defaults(client, fake_upstream, chat_payload):
    fake_upstream(body={})

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["choices"][0]["message"]["content"] == ""
    assert data["choices"][0]["finish_reason"] == "stop"
    assert data["usage"] == {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}


def test_chat_tolerates_non_json_success_body(client, fake_upstream, chat_payload):
    fake_upstream(body="<html>gateway hiccup</html>")

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 200
    assert response.json()["choices"][0]["message"]["content"] == ""


def test_chat_request_ids_are_fresh(client, fake_upstream, chat_payload):
    fake_upstream(body={})

    first = client.post(CHAT_URL, json=chat_payload).json()["requestId"]
    second = client.post(CHAT_URL, json=chat_payload).json()["requestId"]

    assert first != second


@pytest.mark.parametrize(
    "body",
    [
        {"messages": [{"role": "user", "content": "hi"}], "max_tokens": 10},
        {"model": "", "messages": [{"role": "user", "content": "hi"}], "max_tokens": 10},
        {"model": "d", "messages": [], "max_tokens": 10},
        {"model": "d", "messages": "hi", "max_tokens": 10},
        {"model": "d", "messages": [{"role": "user", "content": "hi"}]},
        {"model": "d", "messages": [{"role": "user", "content": "hi"}], "max_tokens": "10"},
        {"model": "d", "messages": [{"role": "user", "content": "hi"}], "max_tokens": True},
        [1, 2, 3],
    ],
)
def test_chat_rejects_invalid_payload_without_upstream_call(client, fake_upstream, body):
    fake = fake_upstream(body={})

    response = client.post(CHAT_URL, json=body)

    assert response.status_code == 400
    assert fake.calls == []


def test_chat_rejects_unparseable_json(client, fake_upstream):
    fake = fake_upstream(body={})

    response = client.post(
        CHAT_URL,
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.text == "Invalid JSON"
    assert fake.calls == []


def test_chat_rejects_non_finite_max_tokens(client, fake_upstream):
    fake = fake_upstream(body={})

    response = client.post(
        CHAT_URL,
        content=b'{"model": "d", "messages": [{"role": "user", "content": "x"}], "max_tokens": NaN}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "max_tokens" in response.text
    assert fake.calls == []


@pytest.mark.parametrize("missing", ["aoai_endpoint", "aoai_api_version", "aoai_api_key"])
def test_chat_misconfigured_returns_500_for_any_payload(make_client, fake_upstream, chat_payload, missing):
    fake = fake_upstream(body={})
    client = make_client(make_settings(**{missing: "   "}))

    valid = client.post(CHAT_URL, json=chat_payload)
    invalid = client.post(CHAT_URL, content=b"garbage")

    assert valid.status_code == 500
    assert invalid.status_code == 500
    assert missing.upper() in valid.text
    assert valid.headers["Access-Control-Allow-Origin"] == "*"
    assert fake.calls == []


def test_chat_timeout_returns_504_and_cancels_call(make_client, fake_upstream, chat_payload):
    fake = fake_upstream(body={}, delay=5.0)
    client = make_client(make_settings(request_timeout_ms=50))

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 504
    assert "timed out" in response.text
    assert fake.cancelled is True


def test_chat_transport_error_returns_502(client, fake_upstream, chat_payload):
    fake_upstream(error=aiohttp.ClientConnectionError("Connection refused"))

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 502
    assert response.text == "Connection refused"
    assert response.headers["content-type"].startswith("text/plain")


def test_chat_passes_through_upstream_error_message(client, fake_upstream, chat_payload):
    fake_upstream(status_code=429, body={"error": {"message": "rate limited"}})

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 429
    assert response.text == "rate limited"
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_chat_upstream_error_falls_back_to_raw_text(client, fake_upstream, chat_payload):
    fake_upstream(status_code=503, body="Service Unavailable")

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 503
    assert response.text == "Service Unavailable"


def test_chat_upstream_error_without_body(client, fake_upstream, chat_payload):
    fake_upstream(status_code=404, body="")

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 404
    assert response.text == "HTTP 404"


def test_chat_undecodable_success_body_gets_defaults(client, fake_upstream, chat_payload):
    fake_upstream(body=b"\xff\xfe not utf8")

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["choices"][0]["message"]["content"] == ""
    assert data["usage"] == {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}


def test_chat_undecodable_error_body_keeps_upstream_status(client, fake_upstream, chat_payload):
    fake_upstream(status_code=429, body=b"\xff\xfe")

    response = client.post(CHAT_URL, json=chat_payload)

    assert response.status_code == 429
    assert response.text == "\ufffd\ufffd"
