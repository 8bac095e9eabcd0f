"""
API tests for the feedback endpoint.

Tests cover:
- Anonymous submission and webhook forwarding
- Per-address rate limiting with Retry-After
- Best-effort delivery when the webhook fails
"""

import httpx
import pytest

from conftest import StubConfigProvider

FEEDBACK = {"name": "Thrall", "anonymous": False, "message": "Great raid night!"}


def test_feedback_accepted_anonymously(client, webhook_client):
    """Feedback needs no credential and is forwarded to the webhook."""
    response = client.post("/api/feedback", json=FEEDBACK)

    assert response.status_code == 202
    assert response.json() == {"message": "Feedback received"}
    webhook_client.post.assert_awaited_once()
    url = webhook_client.post.await_args.args[0]
    payload = webhook_client.post.await_args.kwargs["json"]
    assert url == "https://chat.example.com/api/webhooks/1/abc"
    fields = {f["name"]: f["value"] for f in payload["embeds"][0]["fields"]}
    assert fields == {"From": "Thrall", "Anonymous": "No", "Message": "Great raid night!"}


def test_feedback_accepted_with_bad_credential(client, webhook_client):
    response = client.post("/api/feedback", json=FEEDBACK, headers={"Authorization": "Bearer junk"})

    assert response.status_code == 202


def test_anonymous_feedback_hides_name(client, webhook_client):
    client.post("/api/feedback", json=dict(FEEDBACK, anonymous=True))

    payload = webhook_client.post.await_args.kwargs["json"]
    assert payload["embeds"][0]["fields"][0]["value"] == "Anonymous"


def test_eleventh_submission_is_rate_limited(client, webhook_client):
    """Ten submissions per hour per address; the eleventh gets 429."""
    for _ in range(10):
        assert client.post("/api/feedback", json=FEEDBACK).status_code == 202

    response = client.post("/api/feedback", json=FEEDBACK)

    assert response.status_code == 429
    assert response.json()["StatusCode"] == 429
    assert 0 < int(response.headers["Retry-After"]) <= 3600
    assert webhook_client.post.await_count == 10


def test_rate_limit_is_configurable(build_client):
    client = build_client(StubConfigProvider(rate_limit=2))

    statuses = [client.post("/api/feedback", json=FEEDBACK).status_code for _ in range(3)]

    assert statuses == [202, 202, 429]


def test_webhook_failure_still_accepted(client, webhook_client):
    """Delivery errors are logged, not surfaced to the caller."""
    webhook_client.post.side_effect = httpx.ConnectError("connection refused")

    response = client.post("/api/feedback", json=FEEDBACK)

    assert response.status_code == 202


def test_webhook_error_status_still_accepted(client, webhook_client):
    webhook_client.post.return_value.is_success = False
    webhook_client.post.return_value.status_code = 500

    assert client.post("/api/feedback", json=FEEDBACK).status_code == 202


def test_missing_webhook_url_still_accepted(build_client, webhook_client):
    client = build_client(StubConfigProvider(webhook_url=None))

    response = client.post("/api/feedback", json=FEEDBACK)

    assert response.status_code == 202
    webhook_client.post.assert_not_awaited()


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Thrall", "anonymous": False},
        {"name": "Thrall", "anonymous": False, "message": "hi"},
        {"name": "Thrall", "anonymous": False, "message": "x" * 2001},
    ],
)
def test_invalid_feedback_is_400(client, webhook_client, payload):
    response = client.post("/api/feedback", json=payload)

    assert response.status_code == 400
    assert response.json()["StatusCode"] == 400
    webhook_client.post.assert_not_awaited()
