"""Download of canonical license texts."""

import urllib.parse
from typing import Optional

import requests

from ..exceptions import ConfigurationError, FetchError

DEFAULT_TIMEOUT = 30.0

# Non text/* content types still accepted as license text
_TEXTUAL_APPLICATION_TYPES = {
    "application/json",
    "application/xml",
    "application/yaml",
    "application/x-yaml",
}


class LicenseFetcher:
    """Fetches license texts over HTTP(S).

    One GET per call, bounded by ``timeout``, never retried and never cached.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        """Initialize the fetcher.

        Args:
            timeout (float): Connect and read timeout in seconds.
            session (requests.Session, optional): Session to use, mainly for tests.
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, url: Optional[str]) -> str:
        """Download the text at ``url``.

        Args:
            url (str): HTTP or HTTPS URL of the license text.

        Returns:
            str: The decoded UTF-8 body.

        Raises:
            ConfigurationError: If no URL is configured.
            FetchError: If the URL is malformed, the request fails, or the
                response is not a non-empty text document.
        """
        if not url or not url.strip():
            raise ConfigurationError("The license URL must be set")
        url = url.strip()
        self._validate_url(url)

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Could not download license from {url}: {e}", url=url) from e

        content_type = response.headers.get("Content-Type", "")
        if content_type and not _is_textual(content_type):
            raise FetchError(f"License at {url} is not a text document ({content_type})", url=url)

        try:
            text = response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FetchError(f"License at {url} is not valid UTF-8 text: {e}", url=url) from e

        # Byte order marks are not part of the text
        text = text.lstrip("\ufeff")
        if not text.strip():
            raise FetchError(f"License at {url} is empty", url=url)
        return text

    def close(self) -> None:
        self.session.close()

    @staticmethod
    def _validate_url(url: str) -> None:
        try:
            parsed = urllib.parse.urlparse(url)
        except ValueError as e:
            raise FetchError(f"Invalid license URL {url}: {e}", url=url) from e
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise FetchError(f"Invalid license URL {url}: expected an http(s) URL with a host", url=url)


def _is_textual(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type.startswith("text/") or media_type in _TEXTUAL_APPLICATION_TYPES
