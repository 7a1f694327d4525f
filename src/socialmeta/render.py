"""HTML fragments for resolved Graph API payloads.

Each renderer takes the payload exactly as the resolver returned it (which may
be ``None``, an upstream error object, or a payload without the wanted field)
and an optional empty-state message.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime
from html import escape
from typing import Any

from socialmeta.errors import upstream_error_message
from socialmeta.models.pages import MetadataKind

Renderer = Callable[..., str]

DEFAULT_EMPTY_MESSAGE = "Currently there are no entries given in Facebook"

DAY_NAMES = {
    "mon": "Monday",
    "tue": "Tuesday",
    "wed": "Wednesday",
    "thu": "Thursday",
    "fri": "Friday",
    "sat": "Saturday",
    "sun": "Sunday",
}

_HOURS_KEY_RE = re.compile(r"(\w{3})_(\d+)_(open|close)")


def _field(payload: Any, name: str) -> Any:
    if isinstance(payload, dict):
        return payload.get(name)
    return None


def render_empty(payload: Any, empty_message: str | None = None) -> str:
    """Empty-state block, followed by the upstream error message if there is one."""
    message = empty_message or DEFAULT_EMPTY_MESSAGE
    html = (
        '<div class="social-plugin-metadata-empty" style="text-align: center">'
        f"{escape(message)}</div>"
    )
    error = upstream_error_message(payload)
    if error:
        html += f'<div class="social-plugin-metadata-error"><small>{escape(error)}</small></div>'
    return html


# ---------------------------------------------------------------------------
# Business hours
# ---------------------------------------------------------------------------


def group_hours(hours: dict[str, str]) -> dict[str, dict[str, dict[str, str]]]:
    """Group ``mon_1_open``-style keys into ``{day: {slot: {"open", "close"}}}``.

    Days and slots keep the order in which they first appear.
    """
    grouped: dict[str, dict[str, dict[str, str]]] = {}
    for key, value in hours.items():
        m = _HOURS_KEY_RE.search(key)
        if m is None:
            continue
        day, slot, edge = m.groups()
        times = grouped.setdefault(day, {}).setdefault(slot, {"open": "", "close": ""})
        times[edge] = str(value)
    return grouped


def render_business_hours(payload: Any, empty_message: str | None = None) -> str:
    hours = _field(payload, "hours")
    if not hours or not isinstance(hours, dict):
        return render_empty(payload, empty_message)

    parts = ['<div class="social-plugin-metadata-hours">']
    for day, slots in group_hours(hours).items():
        parts.append('<div class="social-plugin-metadata-days">')
        parts.append(f"<div>{escape(DAY_NAMES.get(day, day))}</div>")
        parts.append('<div class="social-plugin-metadata-hours-times">')
        for times in slots.values():
            parts.append(f"<div>{escape(times['open'])} - {escape(times['close'])}</div>")
        parts.append("</div>")
        parts.append("</div>")
    parts.append("</div>")
    return "".join(parts)


# ---------------------------------------------------------------------------
# About
# ---------------------------------------------------------------------------


def render_about(payload: Any, empty_message: str | None = None) -> str:
    about = _field(payload, "about")
    if not about:
        return render_empty(payload, empty_message)
    return f'<div class="social-plugin-metadata-about">{escape(str(about))}</div>'


# ---------------------------------------------------------------------------
# Last post
# ---------------------------------------------------------------------------


def parse_created_time(value: str) -> datetime:
    """Parse Graph API timestamps such as ``2024-05-01T10:00:00+0000``."""
    try:
        created = datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        created = datetime.fromisoformat(value)
    if created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    return created


def friendly_age(created: datetime, now: datetime | None = None) -> str:
    now = now or datetime.now(UTC)
    seconds = int((now - created).total_seconds())
    if seconds > 60 * 60 * 24 * 3:
        return created.astimezone(UTC).strftime("%x")
    if seconds > 60 * 60 * 24:
        return f"{seconds // (60 * 60 * 24)} days ago"
    if seconds > 60 * 60:
        return f"{seconds // (60 * 60)} hours ago"
    return f"{max(seconds, 0) // 60} minutes ago"


def render_last_post(
    payload: Any,
    empty_message: str | None = None,
    now: datetime | None = None,
) -> str:
    posts = _field(payload, "data")
    if not posts or not isinstance(posts, list):
        return render_empty(payload, empty_message)

    post = posts[-1]
    if not isinstance(post, dict):
        return render_empty(payload, empty_message)
    message = escape(str(post.get("message") or ""))
    permalink = escape(str(post.get("permalink_url", "")), quote=True)

    created_time = post.get("created_time")
    age = ""
    if created_time:
        try:
            age = friendly_age(parse_created_time(created_time), now)
        except ValueError:
            age = ""

    return (
        '<div class="social-plugin-metadata-lastpost">'
        f"{message}"
        '<div class="social-plugin-metadata-lastpost-footer">'
        '<div class="social-plugin-metadata-lastpost-link">'
        f'<small><a href="{permalink}" target="_blank">Open on Facebook</a></small>'
        "</div>"
        f'<div class="social-plugin-metadata-lastpost-created"><small>{escape(age)}</small></div>'
        "</div>"
        "</div>"
    )


RENDERERS: dict[MetadataKind, Renderer] = {
    MetadataKind.BUSINESS_HOURS: render_business_hours,
    MetadataKind.ABOUT: render_about,
    MetadataKind.LAST_POST: render_last_post,
}


def render_kind(kind: MetadataKind, payload: Any, empty_message: str | None = None) -> str:
    return RENDERERS[kind](payload, empty_message)
