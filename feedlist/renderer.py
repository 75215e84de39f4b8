from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .types import FeedResponse


def render_page(response: FeedResponse, output_path: Path, title: str | None = None) -> None:
    """Write a standalone HTML page around the response's list markup."""
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html"]),
    )
    template = env.get_template("page.html")

    html = template.render(
        title=title or response.url,
        source_url=response.url,
        generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        total=len(response.items or []),
        list_html=response.html,
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
