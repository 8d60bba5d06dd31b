"""Remote paged content source.

Wraps a fetch collaborator ``(page, page_size, static_params) -> response``
and extracts the items array and total count from the response under
configurable keys. Any failure of the collaborator surfaces as a
``TransportError`` tagged with the attempted direction and page.
"""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from loadmore.core.config import SourceMode
from loadmore.core.errors import TransportError
from loadmore.core.logging import get_logger
from loadmore.ports.sources import PageFetcher, PageRequest, PageResult

logger = get_logger(__name__)

T = TypeVar("T")


class RemoteContentSource(Generic[T]):
    """Content source backed by an external paged endpoint.

    The total is unknown until the first response arrives.
    """

    def __init__(
        self,
        fetch: PageFetcher,
        static_params: Mapping[str, Any] | None = None,
        data_key: str = "data",
        total_key: str = "total",
    ) -> None:
        self._fetch = fetch
        self._static_params = dict(static_params or {})
        self._data_key = data_key
        self._total_key = total_key
        self._total: int | None = None

    @property
    def mode(self) -> SourceMode:
        return SourceMode.REMOTE

    def size(self) -> int | None:
        return self._total

    async def load(self, request: PageRequest) -> PageResult[T]:
        logger.debug(
            "remote_page_requested",
            page=request.page,
            page_size=request.page_size,
            direction=request.direction.value,
        )
        try:
            response = await self._fetch(
                request.page, request.page_size, dict(self._static_params)
            )
            result: PageResult[T] = self.parse(response)
        except Exception as ex:
            logger.warning(
                "remote_page_failed",
                page=request.page,
                direction=request.direction.value,
                error=str(ex),
            )
            raise TransportError(
                f"Failed to load page {request.page}: {ex}",
                direction=request.direction,
                page=request.page,
                cause=ex,
            ) from ex

        self._total = result.total
        return result

    def parse(self, response: Mapping[str, Any]) -> PageResult[T]:
        """Extract items and total, defaulting missing keys to ``[]`` and 0.

        Raises:
            TypeError: If the response or its items are not the expected shape.
            ValueError: If the total cannot be read as an integer.
        """
        if not isinstance(response, Mapping):
            raise TypeError(
                f"Expected a mapping response, got {type(response).__name__}"
            )
        items = response.get(self._data_key) or []
        if not isinstance(items, list):
            raise TypeError(
                f"Response key {self._data_key!r} must hold a list, "
                f"got {type(items).__name__}"
            )
        total = int(response.get(self._total_key) or 0)
        return PageResult(items=list(items), total=max(0, total))

    def forget_total(self) -> None:
        self._total = None
