"""Ingest — read the web app's journal export and produce journal.json.

The export is the JSON the journal API returns for one year, with related
photo / menu / blog rows already joined in:

    {
      "year": 2024,
      "title": "Family Thanksgiving",
      "journal_sections": [
        {"id": 7, "title": "Dinner", "content_items": [
            {"content_item_id": 1, "content_type": "heading", "custom_text": "...",
             "heading_level": 2, "display_order": 1, "is_visible": true,
             "page_break_before": false, "page_break_after": false},
            {"content_item_id": 2, "content_type": "photo",
             "photo": {"s3_url": "...", "caption": "..."}, "display_order": 2},
            ...
        ]}
      ]
    }

Reads:  data/journal.json
Writes: data/.cache/journal.json  (Journal)
"""
import json
import logging
from collections.abc import Mapping
from typing import Any

from models.content import KNOWN_KINDS, ContentEntry, parse_entry
from models.journal import Journal, Section
from settings import Settings

logger = logging.getLogger(__name__)

# content_type values of the web app that are named differently here
_KIND_ALIASES = {"page_photo": "full_page_photo"}


def run(settings: Settings) -> Journal:
    """Parse the journal export and write journal.json to the cache.

    Raises FileNotFoundError if the export is missing.
    """
    raw = json.loads(settings.journal_path.read_text(encoding="utf-8"))
    journal = journal_from_export(raw)

    artifact_path = settings.cache_dir / "journal.json"
    settings.cache_dir.mkdir(parents=True, exist_ok=True)
    artifact_path.write_text(journal.model_dump_json(indent=2), encoding="utf-8")

    logger.info("Ingest complete → %s", artifact_path)
    logger.info("  Title:    %s", journal.title)
    logger.info("  Year:     %s", journal.year)
    logger.info("  Sections: %d", len(journal.sections))
    logger.info("  Entries:  %d", sum(len(s.entries) for s in journal.sections))

    return journal


def journal_from_export(raw: Mapping[str, Any]) -> Journal:
    sections = [
        _section_from_export(s, position)
        for position, s in enumerate(raw.get("journal_sections") or [], start=1)
        if isinstance(s, Mapping)
    ]
    fields: dict[str, Any] = {"year": raw.get("year"), "sections": sections}
    if raw.get("title"):
        fields["title"] = raw["title"]
    return Journal(**fields)


def _section_from_export(raw: Mapping[str, Any], position: int) -> Section:
    section_id = raw.get("journal_section_id", raw.get("id", position))
    items = [i for i in raw.get("content_items") or [] if isinstance(i, Mapping)]

    # Items without a usable display_order go after every ordered item,
    # keeping their export position among themselves.
    last_order = max(
        (o for o in (_display_order(i) for i in items) if o is not None),
        default=0,
    )
    return Section(
        id=section_id,
        title=raw.get("title") or "",
        entries=[
            entry_from_content_item(
                item, fallback_id=f"{section_id}-{n}", fallback_order=last_order + n,
            )
            for n, item in enumerate(items, start=1)
        ],
    )


# ---------------------------------------------------------------------------
# Content items
# ---------------------------------------------------------------------------

def entry_from_content_item(
    item: Mapping[str, Any],
    fallback_id: str = "",
    fallback_order: int = 0,
) -> ContentEntry:
    """Convert one exported content item into a ContentEntry.

    Unknown content types are kept (as UnknownEntry) and logged.
    """
    content_type = item.get("content_type") or "unknown"
    kind = _KIND_ALIASES.get(content_type, content_type)
    if kind not in KNOWN_KINDS:
        logger.warning(
            "Unknown content type %r (item %s) — laid out as a text block",
            content_type, item.get("content_item_id", fallback_id),
        )

    order = _display_order(item)
    return parse_entry({
        "id": item.get("content_item_id", item.get("id", fallback_id)),
        "kind": kind,
        "order": fallback_order if order is None else order,
        "manual_break_before": bool(item.get("page_break_before")),
        "manual_break_after": bool(item.get("page_break_after")),
        "visible": item.get("is_visible", True) is not False,
        "payload": _payload(kind, item),
    })


def _payload(kind: str, item: Mapping[str, Any]) -> dict[str, Any]:
    if kind == "heading":
        return {"text": item.get("custom_text"), "level": item.get("heading_level", 1)}
    if kind in ("photo", "full_page_photo"):
        photo = _mapping(item.get("photo"))
        return {
            "image": photo.get("s3_url") or photo.get("filename"),
            "caption": photo.get("caption") or photo.get("description"),
        }
    if kind == "menu":
        menu = _mapping(item.get("menu"))
        return {"image": menu.get("menu_image_s3_url"), "title": menu.get("menu_title")}
    if kind == "blog":
        blog = _mapping(item.get("blog_post"))
        return {
            "title": blog.get("title"),
            "body": blog.get("content"),
            "featured_image": blog.get("featured_image") or None,
            "images": blog.get("images"),
        }
    # text and unknown kinds
    return {"text": item.get("custom_text")}


def _display_order(item: Mapping[str, Any]) -> int | None:
    value = item.get("display_order")
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}
