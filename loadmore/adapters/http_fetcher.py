"""aiohttp-backed page fetcher for remote content sources.

Issues one HTTP request per page with the page number and page size added
to the caller's static parameters, and returns the decoded JSON body.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiohttp

from loadmore.core.errors import FetchError
from loadmore.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


class HttpPageFetcher:
    """Fetch collaborator that calls a JSON endpoint.

    Instances are callables matching ``PageFetcher`` and can be passed
    straight to ``RemoteContentSource``.

    Attributes:
        url: Endpoint URL.
        method: HTTP method. Parameters go in the query string for GET and in
            a form body otherwise.
        page_param: Name of the page number parameter.
        per_page_param: Name of the page size parameter.
        timeout: Total request timeout in seconds.
    """

    def __init__(
        self,
        url: str,
        method: str = "GET",
        page_param: str = "page",
        per_page_param: str = "per_page",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.url = url
        self.method = method.upper()
        self.page_param = page_param
        self.per_page_param = per_page_param
        self.timeout = timeout
        self.headers = dict(headers or {})

    def build_params(
        self, page: int, page_size: int, static_params: Mapping[str, Any]
    ) -> dict[str, str]:
        """Merge static parameters with the paging parameters.

        Paging parameters win over static ones with the same name.
        """
        params = {key: str(value) for key, value in static_params.items()}
        params[self.page_param] = str(page)
        params[self.per_page_param] = str(page_size)
        return params

    async def __call__(
        self, page: int, page_size: int, static_params: Mapping[str, Any]
    ) -> Mapping[str, Any]:
        """Fetch one page.

        Raises:
            FetchError: On network failure, non-2xx status or a non-JSON body.
        """
        params = self.build_params(page, page_size, static_params)
        request_kwargs: dict[str, Any] = {
            "headers": self.headers,
            "timeout": aiohttp.ClientTimeout(total=self.timeout),
        }
        if self.method == "GET":
            request_kwargs["params"] = params
        else:
            request_kwargs["data"] = params

        logger.debug("http_page_fetch", url=self.url, page=page, page_size=page_size)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.request(
                    self.method, self.url, **request_kwargs
                ) as response:
                    if not 200 <= response.status < 300:
                        error_text = await response.text()
                        logger.error(
                            "http_page_fetch_failed",
                            url=self.url,
                            status=response.status,
                            body=error_text[:200],
                        )
                        raise FetchError(
                            f"Request failed with status {response.status}: {error_text}",
                            status=response.status,
                        )
                    data = await response.json()
        except aiohttp.ClientError as ex:
            logger.error("http_page_network_error", url=self.url, error=str(ex))
            raise FetchError(f"Network error while fetching page {page}: {ex}") from ex

        if not isinstance(data, Mapping):
            raise FetchError(
                f"Expected a JSON object from {self.url}, got {type(data).__name__}"
            )
        return data
