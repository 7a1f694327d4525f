"""Render entry points: shortcodes and the widget.

    [fb-pageinfo-businesshours page_id="..." empty_message=""]
    [fb-pageinfo-about page_id="..." empty_message=""]
    [fb-pageinfo-lastpost page_id="..." empty_message=""]
"""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from socialmeta.errors import ErrorCode, SocialMetaError
from socialmeta.models.pages import MetadataKind
from socialmeta.render import render_kind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from socialmeta.models.callbacks import WidgetSettings
    from socialmeta.state import AppState

SHORTCODE_TAGS: dict[str, MetadataKind] = {
    "fb-pageinfo-businesshours": MetadataKind.BUSINESS_HOURS,
    "fb-pageinfo-about": MetadataKind.ABOUT,
    "fb-pageinfo-lastpost": MetadataKind.LAST_POST,
}


async def render(
    state: AppState,
    kind: MetadataKind,
    page_id: str,
    empty_message: str | None = None,
) -> str:
    """Look up *page_id*, resolve *kind* for it and render the result."""
    page = await state.pages.find(page_id)
    payload = await state.resolver.resolve(page, kind)
    return render_kind(kind, payload, empty_message)


async def render_shortcode(state: AppState, tag: str, attrs: Mapping[str, str]) -> str:
    kind = SHORTCODE_TAGS.get(tag)
    if kind is None:
        raise SocialMetaError(ErrorCode.INVALID_INPUT, f"Unknown shortcode: {tag!r}")
    return await render(state, kind, attrs.get("page_id", ""), attrs.get("empty_message"))


async def render_widget(state: AppState, settings: WidgetSettings) -> str:
    page = await state.pages.find(settings.page_id)
    payload = await state.resolver.resolve(page, settings.kind)

    parts = ['<div class="social-plugin-metadata-widget">']
    if settings.title:
        parts.append(f'<h3 class="social-plugin-metadata-widget-title">{escape(settings.title)}</h3>')
    if settings.show_page_name and page is not None:
        parts.append(f'<h4 class="social-plugin-metadata-title">{escape(page.name)}</h4>')
    parts.append(render_kind(settings.kind, payload))
    parts.append("</div>")
    return "".join(parts)
