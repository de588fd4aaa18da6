"""HTTP access to index and phrase set files.

Resources live at ``{base_url}/{locale}/{file_id}`` and are JSON documents.
"""

from typing import Any

import httpx

from route_polyglot.logging import get_module_logger

logger = get_module_logger()


class ResourceFetchError(Exception):
    """Raised when a resource request fails or its body is not JSON.

    The loader turns this into the index or phrase specific error.
    """

    pass


class ResourceFetcher:
    """Fetches locale resource files over HTTP.

    Attributes:
        client: Async HTTP client used for every request.
        base_url: Base URL the locale directories are served under.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.log = logger.bind(base_url=self.base_url)

    def url_for(self, locale: str, file_id: str) -> str:
        """Build the URL of a resource file (e.g., ``/i18n/en/common-en.json``)."""
        return f"{self.base_url}/{locale}/{file_id}"

    async def get_json(self, locale: str, file_id: str) -> Any:
        """GET a resource file and decode its JSON body.

        Cancelling the awaiting task aborts the request.

        Args:
            locale: Locale directory.
            file_id: File name inside the locale directory.

        Returns:
            Decoded JSON document.

        Raises:
            ResourceFetchError: On transport errors, non-2xx status or invalid JSON.
        """
        url = self.url_for(locale, file_id)
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            self.log.warning("resource_request_failed", url=url, error=str(e))
            raise ResourceFetchError(str(e) or type(e).__name__) from e

        if not response.is_success:
            self.log.warning(
                "resource_request_rejected", url=url, status_code=response.status_code
            )
            raise ResourceFetchError(f"HTTP {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            self.log.warning("resource_json_invalid", url=url, error=str(e))
            raise ResourceFetchError(f"Invalid JSON: {e}") from e
