"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP fetching settings
- ReaderConfig: Feed loading and normalization settings
- ListConfig: List rendering and spatial navigation settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable

import yaml


DEFAULT_ITEM_HTML = "<article><h1>[[title]]</h1><p>[[image_html]][[description]]</p></article>"
DEFAULT_STRIP_TAGS = "a,embed,object,applet,img,iframe"
DIRECTIONS = ("vertical", "horizontal")

# A strip policy is either a comma-separated tag list or a custom callable.
StripPolicy = str | Callable[[str], str] | None


@dataclass
class FetchConfig:
    """Configuration for HTTP feed fetching.

    Attributes:
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed requests
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 20.0
    retries: int = 2
    trust_env: bool = True
    user_agent: str = "feedlist/0.1 (+https://pypi.org/project/feedlist/)"


@dataclass
class ReaderConfig:
    """Configuration for feed loading and item normalization.

    Attributes:
        params: Default URL template parameters merged into every load
        item_location: Tag/key considered an item, at whatever depth it occurs
        convert_xml: Normalize matched XML elements; False returns raw elements
        strip_tags: Tags removed from descriptions, or a callable applied instead;
            a falsy value disables stripping
        item_html: Item template used when rendering the loaded items
        render: Whether to render the items into FeedResponse.html
        direction: Navigation axis for the rendered list ("vertical" or "horizontal")
        chasing: Whether to inject nav-* focus properties into the item template
    """

    params: dict[str, Any] = field(default_factory=dict)
    item_location: str = "item"
    convert_xml: bool = True
    strip_tags: StripPolicy = DEFAULT_STRIP_TAGS
    item_html: str = DEFAULT_ITEM_HTML
    render: bool = True
    direction: str = "vertical"
    chasing: bool = True

    def __post_init__(self) -> None:
        _check_direction(self.direction)


@dataclass
class ListConfig:
    """Configuration for list rendering.

    Attributes:
        item_html: Template for one item; its top-level tag gets focus wiring
        direction: "vertical" (nav-up/nav-down) or "horizontal" (nav-left/nav-right)
        chasing: Whether to inject nav-* CSS properties for spatial navigation
    """

    item_html: str = "<article></article>"
    direction: str = "vertical"
    chasing: bool = True

    def __post_init__(self) -> None:
        _check_direction(self.direction)


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        http_level: Level applied to the httpx and httpcore request loggers
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "feedlist.jsonl"
    http_level: str = "WARNING"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    reader: ReaderConfig = field(default_factory=ReaderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            known = {k: v for k, v in value.items() if k in data[key]}
            data[key].update(known)
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to a nested dictionary of its sections."""
    return {
        section.name: {f.name: getattr(getattr(cfg, section.name), f.name) for f in fields(getattr(cfg, section.name))}
        for section in fields(cfg)
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        reader=ReaderConfig(**data["reader"]),
        logging=LoggingConfig(**data["logging"]),
    )


def _check_direction(direction: str) -> None:
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be 'vertical' or 'horizontal', got {direction!r}")
