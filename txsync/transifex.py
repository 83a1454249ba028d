"""Transifex REST API client, using httpx for the async download flow.

Downloading a translation is a three step exchange:

1. POST a ``resource_translations_async_downloads`` job; the job status URL
   comes back in the ``Content-Location`` header.
2. Poll the status URL until it answers ``303 See Other``; the file URL is
   in its ``Location`` header.
3. GET the file.
"""
from __future__ import annotations

import logging
import time

import httpx

from txsync.errors import (
    DownloadRequestError,
    DownloadTimeoutError,
    TransifexAuthError,
    TransifexError,
)

logger = logging.getLogger("txsync.transifex")

DEFAULT_API_URL = "https://rest.api.transifex.com"
JSONAPI_CONTENT_TYPE = "application/vnd.api+json"


class TransifexClient:
    """Fetches translated resource files from Transifex."""

    def __init__(
        self,
        token: str,
        organisation: str,
        project: str,
        resource: str,
        api_url: str = DEFAULT_API_URL,
        poll_attempts: int = 10,
        poll_interval: float = 1.0,
        timeout: float = 30.0,
    ):
        if not token:
            raise TransifexAuthError(
                "No Transifex API token configured. Set TRANSIFEX_TOKEN."
            )
        self.token = token
        self.organisation = organisation
        self.project = project
        self.resource = resource
        self.api_url = api_url.rstrip("/")
        self.poll_attempts = max(1, poll_attempts)
        self.poll_interval = poll_interval
        self.timeout = timeout

    @classmethod
    def from_config(cls) -> "TransifexClient":
        """Build a client from the resolved txsync configuration."""
        from txsync.core.config_service import get_config_service

        config = get_config_service()
        return cls(
            token=config.get("transifex.token", ""),
            organisation=config.get("transifex.organisation", ""),
            project=config.get("transifex.project", ""),
            resource=config.get("transifex.resource", ""),
            api_url=config.get("transifex.api_url", DEFAULT_API_URL),
            poll_attempts=config.get("transifex.poll_attempts", 10),
            poll_interval=config.get("transifex.poll_interval", 1.0),
        )

    @property
    def resource_id(self) -> str:
        return f"o:{self.organisation}:p:{self.project}:r:{self.resource}"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": JSONAPI_CONTENT_TYPE,
            "Authorization": f"Bearer {self.token}",
        }

    def _download_payload(self, locale: str) -> dict:
        return {
            "data": {
                "type": "resource_translations_async_downloads",
                "attributes": {
                    "content_encoding": "text",
                    "file_type": "default",
                    "mode": "default",
                    "pseudo": False,
                },
                "relationships": {
                    "resource": {
                        "data": {"type": "resources", "id": self.resource_id},
                    },
                    "language": {
                        "data": {"type": "languages", "id": f"l:{locale}"},
                    },
                },
            },
        }

    def fetch_translation(self, locale: str) -> str:
        """Download the translated resource file for ``locale``.

        Raises:
            DownloadRequestError: If the download job could not be created.
            DownloadTimeoutError: If the job never produced a file location.
            TransifexError: On any transport failure.
        """
        headers = self._headers()
        try:
            response = httpx.post(
                f"{self.api_url}/resource_translations_async_downloads",
                headers=headers,
                json=self._download_payload(locale),
                follow_redirects=True,
                timeout=self.timeout,
            )
            status_url = response.headers.get("Content-Location")
            if not status_url:
                raise DownloadRequestError(
                    f"Unable to retrieve translation file for {locale} "
                    f"(unable to request file download action) [{response.status_code}]",
                    locale=locale,
                    status=response.status_code,
                )

            attempts = 0
            while True:
                time.sleep(self.poll_interval)
                response = httpx.get(
                    status_url,
                    headers=headers,
                    follow_redirects=False,
                    timeout=self.timeout,
                )
                attempts += 1
                if response.status_code == 303 or attempts >= self.poll_attempts:
                    break
                logger.debug("Download for %s not ready (attempt %d, HTTP %d)", locale, attempts, response.status_code)

            download_url = response.headers.get("Location")
            if not download_url:
                raise DownloadTimeoutError(
                    f"Unable to retrieve translation file for {locale} "
                    f"(unable to retrieve file download location) [{response.status_code}]",
                    locale=locale,
                    status=response.status_code,
                    context={"attempts": attempts},
                )

            response = httpx.get(download_url, follow_redirects=True, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            raise TransifexError(
                f"Transifex download failed for {locale} (HTTP {e.response.status_code})",
                locale=locale,
                status=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransifexError(
                f"Cannot reach Transifex for {locale}: {e}",
                locale=locale,
            ) from e
