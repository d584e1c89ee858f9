# -*- coding: utf-8 -*-
"""
microCMS Service
=================
Client for the two microCMS APIs used by the blog stack:
  - Management API: media (image) upload
  - Content API: create / list / get blog entries

API Docs: https://document.microcms.io/content-api/
          https://document.microcms.io/management-api/
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import requests

from blog_stack.config.settings import MicroCMSConfig
from blog_stack.models import Blog, BlogResponse, PublishRecord

logger = logging.getLogger("blog.microcms")

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
}
DEFAULT_MIME_TYPE = "image/jpeg"


class MicroCMSError(RuntimeError):
    """A microCMS request failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def guess_content_type(path: Union[str, Path]) -> str:
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


class MicroCMSService:
    """
    microCMS API client.

    Usage:
        service = MicroCMSService(settings.microcms)
        url = service.upload_image("cover.jpg")
        entry_id = service.create_blog(record)
        page = service.list_blogs({"limit": 5})
    """

    def __init__(self, config: MicroCMSConfig):
        self.config = config
        self.endpoint = config.endpoint
        self.session = requests.Session()
        self.session.headers.update({"X-MICROCMS-API-KEY": config.api_key})
        logger.info(
            "MicroCMSService initialized (domain=%s, endpoint=%s)",
            config.service_domain,
            self.endpoint,
        )

    def _request(
        self, method: str, url: str, expect: Optional[str] = None, **kwargs
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Args:
            expect: Key the JSON object must contain.

        Raises:
            MicroCMSError: On transport errors, non-2xx responses and
                bodies that are not JSON or lack the expected key.
        """
        try:
            response = self.session.request(
                method, url, timeout=self.config.timeout, **kwargs
            )
        except requests.exceptions.RequestException as exc:
            logger.error("microCMS request failed: %s %s: %s", method, url, exc)
            raise MicroCMSError(f"microCMS connection error: {exc}") from exc

        if not response.ok:
            body = response.text
            logger.error(
                "microCMS HTTP error: %s %s -> %d %s",
                method,
                url,
                response.status_code,
                body[:300],
            )
            raise MicroCMSError(
                f"microCMS request failed ({response.status_code}): {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            result = response.json()
        except ValueError as exc:
            logger.error("microCMS returned a non-JSON body: %s %s", method, url)
            raise MicroCMSError(
                f"microCMS response is not JSON: {exc}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        if expect is not None and (
            not isinstance(result, dict) or expect not in result
        ):
            logger.error("microCMS response missing '%s': %s %s", expect, method, url)
            raise MicroCMSError(
                f"microCMS response missing '{expect}'",
                status_code=response.status_code,
                body=response.text,
            )
        return result

    @staticmethod
    def _queries(queries: Optional[dict]) -> dict:
        """Comma-join list values (fields, ids) the way the content API expects."""
        params = {}
        for key, value in (queries or {}).items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                value = ",".join(str(v) for v in value)
            params[key] = value
        return params

    # ------------------------------------------------------------------
    # Management API
    # ------------------------------------------------------------------

    def upload_media(self, data: bytes, content_type: str, file_name: str) -> str:
        """
        Upload a binary file to the media library.

        Args:
            data: File contents.
            content_type: MIME type sent as Content-Type.
            file_name: Suggested file name.

        Returns:
            Public URL of the uploaded media.
        """
        url = f"{self.config.management_base_url}/media"
        result = self._request(
            "POST",
            url,
            expect="url",
            data=data,
            headers={
                "Content-Type": content_type,
                "Content-Disposition": f'attachment; filename="{file_name}"',
            },
        )
        media_url = result["url"]
        logger.info("Uploaded %s (%d bytes) -> %s", file_name, len(data), media_url)
        return media_url

    def upload_image(self, image_path: Union[str, Path]) -> str:
        """Upload a local image file; the MIME type follows the extension."""
        path = Path(image_path)
        return self.upload_media(
            path.read_bytes(), guess_content_type(path), path.name
        )

    # ------------------------------------------------------------------
    # Content API
    # ------------------------------------------------------------------

    def create_blog(self, record: PublishRecord) -> str:
        """Create a blog entry and return its content id."""
        url = f"{self.config.content_base_url}/{self.endpoint}"
        result = self._request("POST", url, expect="id", json=record.to_payload())
        logger.info("Created %s entry %s", self.endpoint, result["id"])
        return result["id"]

    def list_blogs(self, queries: Optional[dict] = None) -> BlogResponse:
        """
        List blog entries.

        Args:
            queries: Content API queries (limit, offset, orders, q, fields,
                ids, filters, depth, draftKey).
        """
        url = f"{self.config.content_base_url}/{self.endpoint}"
        data = self._request("GET", url, params=self._queries(queries))
        return BlogResponse.model_validate(data)

    def get_blog(self, content_id: str, queries: Optional[dict] = None) -> Blog:
        """Fetch a single blog entry by id."""
        url = f"{self.config.content_base_url}/{self.endpoint}/{content_id}"
        data = self._request("GET", url, params=self._queries(queries))
        return Blog.model_validate(data)

    def entry_url(self, content_id: str) -> str:
        """Admin console URL of an entry."""
        return f"{self.config.console_base_url}/{self.endpoint}/{content_id}"
