from datetime import datetime
from unittest import mock

import requests

from blog_stack.models import FormSubmission
from blog_stack.services.slack_service import SlackService


def _submission(kind="career", count=2):
    return FormSubmission(
        type=kind,
        fields=[{"label": f"項目{i}", "value": f"値{i}"} for i in range(count)],
    )


def test_career_header(slack_config):
    blocks = SlackService(slack_config).build_blocks(_submission("career"))
    assert blocks[0]["type"] == "header"
    assert blocks[0]["text"]["text"] == ":briefcase: 中途採用エントリー"


def test_other_types_use_intern_header(slack_config):
    blocks = SlackService(slack_config).build_blocks(_submission("intern"))
    assert blocks[0]["text"]["text"] == ":mortar_board: インターンエントリー"
    blocks = SlackService(slack_config).build_blocks(_submission("anything"))
    assert blocks[0]["text"]["text"] == ":mortar_board: インターンエントリー"


def test_fields_formatted_and_empty_values_marked(slack_config):
    submission = FormSubmission(
        type="career",
        fields=[{"label": "氏名", "value": "山田"}, {"label": "備考", "value": ""}],
    )
    section = SlackService(slack_config).build_blocks(submission)[1]
    assert section["fields"] == [
        {"type": "mrkdwn", "text": "*氏名*\n山田"},
        {"type": "mrkdwn", "text": "*備考*\n(未入力)"},
    ]


def test_non_string_values_rendered_as_text(slack_config):
    submission = FormSubmission(
        type="career",
        fields=[
            {"label": "年齢", "value": 25},
            {"label": "年収", "value": 4.5},
            {"label": "同意", "value": True},
            {"label": "人数", "value": 0},
            {"label": "希望", "value": False},
            {"label": "備考", "value": None},
        ],
    )
    section = SlackService(slack_config).build_blocks(submission)[1]
    texts = [f["text"] for f in section["fields"]]
    assert texts == [
        "*年齢*\n25",
        "*年収*\n4.5",
        "*同意*\ntrue",
        "*人数*\n(未入力)",
        "*希望*\n(未入力)",
        "*備考*\n(未入力)",
    ]


def test_fields_split_into_sections_of_ten(slack_config):
    blocks = SlackService(slack_config).build_blocks(_submission(count=23))
    sections = [b for b in blocks if b["type"] == "section"]
    assert [len(s["fields"]) for s in sections] == [10, 10, 3]


def test_context_line_has_site_and_time(slack_config):
    now = datetime(2024, 4, 1, 9, 5, 3)
    blocks = SlackService(slack_config).build_blocks(_submission(), now=now)
    text = blocks[-1]["elements"][0]["text"]
    assert text == (
        "送信元: <https://int-incubation.com|ARCHECO採用サイト> | 2024/04/01 09:05:03"
    )


def test_send_submission_posts_blocks(slack_config):
    with mock.patch("blog_stack.services.slack_service.requests.post") as post:
        post.return_value = mock.Mock(ok=True, status_code=200, text="ok")
        assert SlackService(slack_config).send_submission(_submission()) is True

    args, kwargs = post.call_args
    assert args == (slack_config.webhook_url,)
    assert kwargs["json"]["blocks"][0]["type"] == "header"


def test_send_submission_reports_rejection(slack_config):
    with mock.patch("blog_stack.services.slack_service.requests.post") as post:
        post.return_value = mock.Mock(ok=False, status_code=404, text="no_service")
        assert SlackService(slack_config).send_submission(_submission()) is False


def test_send_submission_reports_transport_error(slack_config):
    with mock.patch("blog_stack.services.slack_service.requests.post") as post:
        post.side_effect = requests.exceptions.Timeout("slow")
        assert SlackService(slack_config).send_submission(_submission()) is False
