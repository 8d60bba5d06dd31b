"""Adapters for external systems.

This module contains the content source implementations (in-memory and
remote), the aiohttp page fetcher and query-string history helpers.
"""

from loadmore.adapters.factory import create_controller, create_source
from loadmore.adapters.history import QueryStringHistory, page_from_url, url_with_page
from loadmore.adapters.http_fetcher import HttpPageFetcher
from loadmore.adapters.local_source import LocalContentSource
from loadmore.adapters.remote_source import RemoteContentSource

__all__ = [
    "HttpPageFetcher",
    "LocalContentSource",
    "QueryStringHistory",
    "RemoteContentSource",
    "create_controller",
    "create_source",
    "page_from_url",
    "url_with_page",
]
