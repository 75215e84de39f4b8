"""
Feed loading: fetch, format detection, normalization and rendering.

FeedReader is the entry point of the pipeline. ``load()`` fills the URL
template, awaits the fetcher, decides whether the payload is JSON, XML or
nothing usable, normalizes the items it finds and renders them into list
markup. The caller gets a FeedResponse back and, optionally, through a
callback invoked exactly once per load.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Mapping

from .config import FetchConfig, ListConfig, ReaderConfig
from .fetcher import FetchResult, fetch_feed
from .listview import ListView, RenderCounter
from .logging_utils import log_event
from .normalizer import normalize_all
from .template import populate_template
from .treesearch import find_first
from .types import CanonicalItem, FeedResponse, RenderedList
from .xmlnode import element_to_dict, find_elements


logger = logging.getLogger(__name__)

Fetcher = Callable[..., Awaitable[FetchResult]]
Callback = Callable[[FeedResponse], Any]


class FeedReader:
    """Read remote RSS, Atom and JSON feeds into normalized items.

    Attributes:
        config: Item location, conversion, sanitizing and rendering settings
        fetch_config: Options passed to the fetcher on every load
        counter: Render-pass counter shared by every list this reader renders
    """

    def __init__(
        self,
        config: ReaderConfig | None = None,
        fetch_config: FetchConfig | None = None,
        fetch: Fetcher | None = None,
        counter: RenderCounter | None = None,
    ):
        self.config = config or ReaderConfig()
        self.fetch_config = replace(fetch_config) if fetch_config else FetchConfig()
        self.counter = counter or RenderCounter()
        self._fetch = fetch or fetch_feed

    def set_option(self, name: str, value: Any) -> None:
        """Set a fetch option (timeout_seconds, retries, trust_env, user_agent)."""
        if not hasattr(self.fetch_config, name):
            raise ValueError(f"Unknown fetch option: {name}")
        setattr(self.fetch_config, name, value)

    def resolve_url(self, url: str, params: Mapping[str, Any] | None = None) -> str:
        """Fill ``[[name]]`` placeholders from default params overlaid with ``params``."""
        merged = dict(self.config.params)
        if isinstance(params, Mapping):
            merged.update(params)
        return populate_template(url, merged)

    async def load(
        self,
        url: str,
        callback: Callback | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> FeedResponse:
        """Fetch and normalize a feed.

        Args:
            url: URL template, e.g. ``https://example.com/[[section]].xml``
            callback: Called once with the response; may be a coroutine function
            params: URL parameters, taking precedence over the configured defaults

        Returns:
            The FeedResponse also handed to ``callback``
        """
        resolved = self.resolve_url(url, params)
        result = await self._fetch(
            resolved,
            timeout=self.fetch_config.timeout_seconds,
            retries=self.fetch_config.retries,
            user_agent=self.fetch_config.user_agent,
            trust_env=self.fetch_config.trust_env,
        )
        logger.debug("Loaded data from %s", resolved)
        response = self.build_response(result)

        if callback is not None:
            outcome = callback(response)
            if inspect.isawaitable(outcome):
                await outcome
        return response

    def load_sync(
        self,
        url: str,
        callback: Callback | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> FeedResponse:
        """Blocking wrapper around :meth:`load` for synchronous callers."""
        return asyncio.run(self.load(url, callback, params))

    def build_response(self, result: FetchResult) -> FeedResponse:
        """Turn a fetch result into a FeedResponse.

        JSON wins when present; with neither JSON nor XML the response carries
        an error instead of items.
        """
        if result.response_json is not None:
            response = FeedResponse(url=result.url, data=result.response_json)
            response.items = self._json_items(result.response_json)
        elif result.response_xml is None:
            response = FeedResponse(url=result.url, error=f"No XML returned from {result.url}")
            if result.error:
                response.error += f" ({result.error})"
            log_event(logger, "feed_empty", logging.WARNING, url=result.url, status_code=result.status_code)
            return response
        else:
            response = FeedResponse(url=result.url, data=result.response_xml)
            self._read_xml(response, result.response_xml)

        if response.items and self.config.render:
            response.html = self.render(response.items).html

        log_event(
            logger,
            "feed_loaded",
            logging.DEBUG,
            url=result.url,
            items=len(response.items) if response.items is not None else None,
            items_raw=len(response.items_raw) if response.items_raw is not None else None,
        )
        return response

    def render(self, items: list[CanonicalItem], start: Any = None, count: Any = None) -> RenderedList:
        """Render items with the configured item template."""
        view = ListView(
            items,
            ListConfig(
                item_html=self.config.item_html,
                direction=self.config.direction,
                chasing=self.config.chasing,
            ),
            counter=self.counter,
        )
        return view.get_list(start, count)

    def _json_items(self, payload: Any) -> list[CanonicalItem]:
        found = find_first(payload, self.config.item_location)
        if isinstance(found, Mapping):
            found = [found]
        if not isinstance(found, list):
            return []
        return normalize_all(found, source="json", strip_policy=self.config.strip_tags)

    def _read_xml(self, response: FeedResponse, root: Any) -> None:
        response.start = time.time() * 1000
        elements = find_elements(root, self.config.item_location)

        if self.config.convert_xml and elements:
            response.items = normalize_all(
                (element_to_dict(element) for element in elements),
                source="xml",
                strip_policy=self.config.strip_tags,
            )
        else:
            response.items_raw = elements

        response.end = time.time() * 1000
        response.elapsed = response.end - response.start
        logger.debug("Took %.1fms to parse XML", response.elapsed)
