# -*- coding: utf-8 -*-
"""
Central Configuration Module
=============================
Loads environment variables and provides typed settings for the
microCMS publishing pipeline, the read client and the Slack notifier.

Values are read from the process environment; a .env file in the
current working directory is loaded first without overriding values
that are already set.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# .env lives next to where the command is run, not next to the package
# ---------------------------------------------------------------------------
ENV_PATH = Path.cwd() / ".env"

load_dotenv(dotenv_path=ENV_PATH, override=False)


def _require_env(key: str) -> str:
    """Return an env var or exit with a clear error at startup."""
    value = os.getenv(key)
    if not value:
        print(
            f"[CONFIG ERROR] Required environment variable '{key}' is not set. "
            f"Check your .env file at: {ENV_PATH}",
            file=sys.stderr,
        )
        sys.exit(1)
    return value


# ---------------------------------------------------------------------------
# Data classes: grouped, typed, immutable configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MicroCMSConfig:
    """microCMS content + management API configuration."""

    service_domain: str
    api_key: str
    endpoint: str = "blogs"
    timeout: float = 30.0

    @property
    def content_base_url(self) -> str:
        return f"https://{self.service_domain}.microcms.io/api/v1"

    @property
    def management_base_url(self) -> str:
        return f"https://{self.service_domain}.microcms-management.io/api/v1"

    @property
    def console_base_url(self) -> str:
        """Base URL of the entry pages in the microCMS admin console."""
        return f"https://{self.service_domain}.microcms.io/apis"


@dataclass(frozen=True)
class SlackConfig:
    """Slack incoming webhook for form-submission notifications."""

    webhook_url: str = ""
    site_url: str = "https://int-incubation.com"
    site_name: str = "ARCHECO採用サイト"
    timezone: str = "Asia/Tokyo"


@dataclass(frozen=True)
class CategoryConfig:
    """A blog category and the keywords that vote for it."""

    label: str
    keywords: tuple


# ---------------------------------------------------------------------------
# Category registry: declaration order is the tie-break order
# ---------------------------------------------------------------------------
CATEGORIES: list[CategoryConfig] = [
    CategoryConfig(
        label="インタビュー",
        keywords=(
            "インタビュー",
            "聞いて",
            "話を",
            "Q&A",
            "質問",
            "入社理由",
            "一日の流れ",
            "先輩",
            "社員紹介",
        ),
    ),
    CategoryConfig(
        label="社風",
        keywords=(
            "社風",
            "雰囲気",
            "カルチャー",
            "文化",
            "チーム",
            "職場",
            "オフィス",
            "働き方",
            "コミュニケーション",
        ),
    ),
    CategoryConfig(
        label="制度",
        keywords=(
            "制度",
            "福利厚生",
            "研修",
            "評価",
            "休暇",
            "手当",
            "キャリア",
            "教育",
            "支援",
        ),
    ),
    CategoryConfig(
        label="イベント",
        keywords=(
            "イベント",
            "懇親会",
            "勉強会",
            "セミナー",
            "交流",
            "開催",
            "参加",
            "ハッカソン",
            "忘年会",
        ),
    ),
]

CATEGORY_LABELS: tuple = tuple(c.label for c in CATEGORIES)


def get_category(label: str) -> CategoryConfig:
    """Look up a category by its label. Raises ValueError if not found."""
    for cat in CATEGORIES:
        if cat.label == label:
            return cat
    raise ValueError(
        f"Unknown category '{label}'. Valid categories: {', '.join(CATEGORY_LABELS)}"
    )


# ---------------------------------------------------------------------------
# Build configuration instances from environment
# ---------------------------------------------------------------------------


def _build_microcms() -> MicroCMSConfig:
    return MicroCMSConfig(
        service_domain=_require_env("MICROCMS_SERVICE_DOMAIN"),
        api_key=_require_env("MICROCMS_API_KEY"),
        endpoint=os.getenv("MICROCMS_ENDPOINT", "blogs"),
        timeout=float(os.getenv("MICROCMS_TIMEOUT", "30")),
    )


def _build_slack() -> SlackConfig:
    # The webhook is checked per request so the endpoint can answer 500
    return SlackConfig(
        webhook_url=os.getenv("SLACK_WEBHOOK_URL", ""),
        site_url=os.getenv("NOTIFY_SITE_URL", "https://int-incubation.com"),
        site_name=os.getenv("NOTIFY_SITE_NAME", "ARCHECO採用サイト"),
        timezone=os.getenv("NOTIFY_TIMEZONE", "Asia/Tokyo"),
    )


# ---------------------------------------------------------------------------
# Lazy-loaded singleton settings: import and use directly
# ---------------------------------------------------------------------------


class _Settings:
    """Lazy-loading settings container. Configs are built on first access."""

    def __init__(self):
        self._microcms = None
        self._slack = None

    @property
    def microcms(self) -> MicroCMSConfig:
        if self._microcms is None:
            self._microcms = _build_microcms()
        return self._microcms

    @property
    def slack(self) -> SlackConfig:
        if self._slack is None:
            self._slack = _build_slack()
        return self._slack


# Global settings instance: usage: `from blog_stack.config.settings import settings`
settings = _Settings()


def get_settings() -> _Settings:
    """Return the global settings singleton."""
    return settings
