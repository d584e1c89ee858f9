import pytest
from fastapi.testclient import TestClient

from blog_stack.api.notify import app, get_slack_service
from blog_stack.config.settings import SlackConfig

PAYLOAD = {
    "type": "career",
    "fields": [{"label": "氏名", "value": "山田太郎"}, {"label": "メール", "value": ""}],
}


class RecordingSlack:
    def __init__(self, configured=True, result=True, error=None):
        self.configured = configured
        self.result = result
        self.error = error
        self.sent = []

    def send_submission(self, submission):
        if self.error:
            raise self.error
        self.sent.append(submission)
        return self.result


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use(slack):
    app.dependency_overrides[get_slack_service] = lambda: slack
    return slack


def test_post_forwards_submission(client):
    slack = _use(RecordingSlack())
    resp = client.post("/api/notify", json=PAYLOAD)
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert slack.sent[0].type == "career"
    assert slack.sent[0].fields[0].label == "氏名"


def test_numeric_and_boolean_values_accepted(client):
    slack = _use(RecordingSlack())
    payload = {
        "type": "intern",
        "fields": [{"label": "学年", "value": 3}, {"label": "同意", "value": True}],
    }
    resp = client.post("/api/notify", json=payload)
    assert resp.status_code == 200
    assert [f.value for f in slack.sent[0].fields] == [3, True]


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_other_methods_rejected(client, method):
    resp = client.request(method.upper(), "/api/notify")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method not allowed"}


def test_missing_webhook_is_500(client):
    _use(RecordingSlack(configured=False))
    resp = client.post("/api/notify", json=PAYLOAD)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Slack webhook not configured"}


def test_slack_failure_is_502(client):
    _use(RecordingSlack(result=False))
    resp = client.post("/api/notify", json=PAYLOAD)
    assert resp.status_code == 502
    assert resp.json() == {"error": "Slack notification failed"}


def test_unexpected_error_is_500(client):
    _use(RecordingSlack(error=ValueError("bad")))
    resp = client.post("/api/notify", json=PAYLOAD)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_default_service_reads_settings(monkeypatch):
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.example/x")
    for key in ("NOTIFY_SITE_URL", "NOTIFY_SITE_NAME", "NOTIFY_TIMEZONE"):
        monkeypatch.delenv(key, raising=False)
    from blog_stack.config import settings as settings_module

    monkeypatch.setattr(settings_module, "settings", settings_module._Settings())
    service = get_slack_service()
    assert service.configured
    assert service.config == SlackConfig(webhook_url="https://hooks.example/x")
