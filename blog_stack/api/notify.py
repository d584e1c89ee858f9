# -*- coding: utf-8 -*-
"""
Form Notification API
======================
Serverless-style endpoint that receives recruiting form submissions from
the site and forwards them to Slack.

Run locally:
    uvicorn blog_stack.api.notify:app --port 8000
"""

import logging

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from blog_stack.config.settings import get_settings
from blog_stack.models import FormSubmission
from blog_stack.services.slack_service import SlackService

logger = logging.getLogger("api.notify")

app = FastAPI(title="blog_stack notify")


def get_slack_service() -> SlackService:
    return SlackService(get_settings().slack)


@app.post("/api/notify")
def notify(
    submission: FormSubmission,
    slack: SlackService = Depends(get_slack_service),
):
    if not slack.configured:
        logger.error("SLACK_WEBHOOK_URL is not configured")
        return JSONResponse(
            status_code=500, content={"error": "Slack webhook not configured"}
        )

    try:
        sent = slack.send_submission(submission)
    except Exception:
        logger.exception("Notification error")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    if not sent:
        return JSONResponse(
            status_code=502, content={"error": "Slack notification failed"}
        )
    return {"ok": True}


@app.api_route("/api/notify", methods=["GET", "PUT", "PATCH", "DELETE"])
def notify_method_not_allowed():
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed"},
        headers={"Allow": "POST"},
    )
