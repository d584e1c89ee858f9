# -*- coding: utf-8 -*-
"""
Slack Service
=============
Forwards recruiting form submissions to a Slack incoming webhook as
Block Kit messages (header, field sections, source context line).
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

import requests

from blog_stack.config.settings import SlackConfig
from blog_stack.models import FormSubmission

logger = logging.getLogger("blog.slack")

HEADERS = {
    "career": ":briefcase: 中途採用エントリー",
    "intern": ":mortar_board: インターンエントリー",
}
EMPTY_VALUE = "(未入力)"
MAX_SECTION_FIELDS = 10  # Block Kit limit per section


def _display(value) -> str:
    """Render a form value; empty, zero and false read as not filled in."""
    if not value:
        return EMPTY_VALUE
    if isinstance(value, bool):
        return "true"
    return str(value)


class SlackService:
    """Slack webhook client for form-submission notifications."""

    TIMEOUT = 15  # seconds

    def __init__(self, config: SlackConfig):
        self.config = config
        self.webhook_url = config.webhook_url

    @property
    def configured(self) -> bool:
        return bool(self.webhook_url)

    def build_blocks(
        self, submission: FormSubmission, now: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Format a submission as Block Kit blocks."""
        title = HEADERS["career"] if submission.type == "career" else HEADERS["intern"]
        sent_at = now or datetime.now(ZoneInfo(self.config.timezone))

        fields = [
            {
                "type": "mrkdwn",
                "text": f"*{f.label}*\n{_display(f.value)}",
            }
            for f in submission.fields
        ]

        blocks: List[Dict[str, Any]] = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": title, "emoji": True},
            }
        ]
        for start in range(0, len(fields), MAX_SECTION_FIELDS):
            blocks.append(
                {
                    "type": "section",
                    "fields": fields[start : start + MAX_SECTION_FIELDS],
                }
            )
        blocks.append(
            {
                "type": "context",
                "elements": [
                    {
                        "type": "mrkdwn",
                        "text": (
                            f"送信元: <{self.config.site_url}|{self.config.site_name}>"
                            f" | {sent_at.strftime('%Y/%m/%d %H:%M:%S')}"
                        ),
                    }
                ],
            }
        )
        return blocks

    def send_submission(self, submission: FormSubmission) -> bool:
        """
        Post a form submission to the webhook.

        Returns:
            True if Slack accepted the message.
        """
        payload = {"blocks": self.build_blocks(submission)}
        try:
            response = requests.post(
                self.webhook_url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.TIMEOUT,
            )
        except requests.exceptions.RequestException as exc:
            logger.error("Slack webhook request failed: %s", exc)
            return False

        if not response.ok:
            logger.error(
                "Slack webhook failed: status=%d, body=%s",
                response.status_code,
                response.text[:200],
            )
            return False

        logger.info("Slack notification sent (%s, %d fields)", submission.type, len(submission.fields))
        return True
