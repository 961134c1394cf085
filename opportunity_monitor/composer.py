"""Rendering of newly detected records into a notification message."""

from collections import OrderedDict
from dataclasses import dataclass
from html import escape
from typing import Dict, Iterable, List, Optional, Sequence

from .models import DEFAULT_COLOR, IdentifiedRecord, SourceDefinition


@dataclass
class Message:
    """A rendered notification, ready for a channel."""
    subject: str
    text: str
    html: str


def group_by_source(
    records: Iterable[IdentifiedRecord],
    sources: Sequence[SourceDefinition] = (),
) -> "OrderedDict[str, List[IdentifiedRecord]]":
    """Group records by source name, following the configured source order."""
    groups: "OrderedDict[str, List[IdentifiedRecord]]" = OrderedDict(
        (source.name, []) for source in sources
    )
    for record in records:
        groups.setdefault(record.source_name, []).append(record)
    return OrderedDict((name, items) for name, items in groups.items() if items)


def _render_text(groups: Dict[str, List[IdentifiedRecord]], lookup: Dict[str, SourceDefinition]) -> str:
    lines = []
    for name, records in groups.items():
        source = lookup.get(name)
        lines.append(f"[{name}]" + (f" {source.url}" if source else ""))
        for record in records:
            lines.append(f"- {record.title}")
            if record.reference:
                lines.append(f"  Ref: {record.reference}")
            if record.deadline:
                lines.append(f"  Date: {record.deadline}")
        lines.append("")
    return "\n".join(lines).strip()


def _render_item_html(record: IdentifiedRecord, source: Optional[SourceDefinition]) -> str:
    color = source.color if source else DEFAULT_COLOR
    parts = [
        '<li style="margin-bottom: 20px; padding-bottom: 15px; border-bottom: 1px solid #eee;">',
        f'<div style="font-size: 10px; font-weight: bold; text-transform: uppercase; color: #fff; '
        f'background-color: {color}; padding: 2px 6px; display: inline-block; border-radius: 3px; '
        f'margin-bottom: 5px;">{escape(record.source_name)}</div>',
        f'<div style="font-size: 14px; font-weight: bold; color: #333;">{escape(record.title)}</div>',
    ]
    if record.reference:
        parts.append(f'<div style="font-size: 0.9em; color: #555;">Ref: {escape(record.reference)}</div>')
    if record.description:
        parts.append(f'<div style="font-size: 0.9em; color: #555;">{escape(record.description)}</div>')
    if record.deadline:
        parts.append(f'<div style="font-size: 0.9em; color: #777; margin-top: 4px;">Date: {escape(record.deadline)}</div>')
    if source:
        parts.append(
            f'<div style="margin-top: 5px;"><a href="{escape(source.url, quote=True)}" '
            f'style="font-size: 12px; color: {color}; text-decoration: none; font-weight: bold;">'
            'View at source</a></div>'
        )
    parts.append("</li>")
    return "".join(parts)


def _render_html(groups: Dict[str, List[IdentifiedRecord]], lookup: Dict[str, SourceDefinition]) -> str:
    items = "".join(
        _render_item_html(record, lookup.get(name))
        for name, records in groups.items()
        for record in records
    )
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px;">'
        f'<h2 style="color: {DEFAULT_COLOR};">New opportunities</h2>'
        '<p style="font-size: 13px; color: #666;">New items found on the monitored listings:</p>'
        f'<ul style="list-style: none; padding-left: 0;">{items}</ul>'
        "</div>"
    )


def compose(
    records: Sequence[IdentifiedRecord],
    sources: Sequence[SourceDefinition] = (),
) -> Optional[Message]:
    """
    Render new records into a notification message.

    Colors and links come from the matching SourceDefinition and are
    purely cosmetic.

    Args:
        records: Newly detected records.
        sources: Configured sources, used for ordering, colors and links.

    Returns:
        The rendered Message, or None when there is nothing to notify.
    """
    if not records:
        return None

    lookup = {source.name: source for source in sources}
    groups = group_by_source(records, sources)
    count = len(records)
    noun = "item" if count == 1 else "items"

    return Message(
        subject=f"{count} new {noun} detected",
        text=_render_text(groups, lookup),
        html=_render_html(groups, lookup),
    )


def sms_text(message: Message, limit: int = 1500) -> str:
    """Plain-text body trimmed to fit a single SMS request."""
    body = f"{message.subject}\n\n{message.text}"
    if len(body) <= limit:
        return body
    return body[:limit - 3].rstrip() + "..."
