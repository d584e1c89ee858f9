from pathlib import Path

import pytest

from blog_stack.config.settings import MicroCMSConfig, SlackConfig
from blog_stack.models import Blog, BlogResponse
from blog_stack.services.microcms_service import MicroCMSError


class FakeContentStore:
    """In-memory stand-in for MicroCMSService that records every call."""

    def __init__(self, fail_upload=False, fail_create=False):
        self.fail_upload = fail_upload
        self.fail_create = fail_create
        self.calls = []
        self.created = []

    def upload_image(self, image_path):
        self.calls.append(("upload_image", str(image_path)))
        if self.fail_upload:
            raise MicroCMSError("upload rejected", status_code=400, body="bad image")
        Path(image_path).read_bytes()
        return f"https://images.example/{len(self.calls)}.jpg"

    def upload_media(self, data, content_type, file_name):
        self.calls.append(("upload_media", file_name, content_type, len(data)))
        if self.fail_upload:
            raise MicroCMSError("upload rejected", status_code=400, body="bad image")
        return f"https://images.example/{file_name}"

    def create_blog(self, record):
        self.calls.append(("create_blog", record))
        if self.fail_create:
            raise MicroCMSError("create rejected", status_code=500, body="boom")
        self.created.append(record)
        return f"entry-{len(self.created)}"

    def list_blogs(self, queries=None):
        self.calls.append(("list_blogs", queries))
        return BlogResponse(totalCount=0, offset=0, limit=10, contents=[])

    def get_blog(self, content_id, queries=None):
        self.calls.append(("get_blog", content_id))
        return Blog(id=content_id, title="stub")

    def entry_url(self, content_id):
        return f"https://example.microcms.io/apis/blogs/{content_id}"


@pytest.fixture
def store():
    return FakeContentStore()


@pytest.fixture
def cms_config():
    return MicroCMSConfig(service_domain="example", api_key="test-key")


@pytest.fixture
def slack_config():
    return SlackConfig(webhook_url="https://hooks.slack.example/T000/B000/XXX")
