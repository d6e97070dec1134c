"""Read-only queries over a loaded post collection: drafts, ordering, categories, pages."""

import math

from config import CATEGORIES, PAGINATION, get_base


def published(collection: dict[str, dict]) -> list[dict]:
    """Return entries that are not drafts."""
    return [entry for entry in collection.values() if not entry["data"]["draft"]]


def sort_by_date(entries, reverse: bool = True) -> list[dict]:
    """Sort entries by post date, newest first by default. Ties fall back to id."""
    by_id = sorted(entries, key=lambda e: e["id"])
    return sorted(by_id, key=lambda e: e["data"]["date"], reverse=reverse)


def group_by_category(entries) -> dict[str, list[dict]]:
    """Return {category: [entries]} with every category present, in CATEGORIES order."""
    groups: dict[str, list[dict]] = {category: [] for category in CATEGORIES}
    for entry in entries:
        groups[entry["data"]["category"]].append(entry)
    return groups


def page_count(total: int, per_page: int) -> int:
    """Number of pages needed for total items. An empty list still has one page."""
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")
    return max(1, math.ceil(total / per_page))


def _page_url(route: str, page: int) -> str:
    base = get_base()
    route = route.strip("/")
    if page == 1:
        return base + route
    return f"{base}{route}/{page}" if route else f"{base}{page}"


def paginate(entries, page: int = 1, per_page: int = None, route: str = "") -> dict:
    """Slice entries into one listing page.

    Page 1 is served at <base><route>, page N at <base><route>/N.
    Raises ValueError for a page outside 1..last_page.
    """
    if per_page is None:
        per_page = PAGINATION["per_page"]
    entries = list(entries)
    total = len(entries)
    last_page = page_count(total, per_page)
    if page < 1 or page > last_page:
        raise ValueError(f"Page {page} out of range (1-{last_page})")

    start = (page - 1) * per_page
    data = entries[start : start + per_page]
    return {
        "data": data,
        "current_page": page,
        "last_page": last_page,
        "size": per_page,
        "total": total,
        "start": start,
        "end": start + len(data) - 1 if data else start,
        "url": {
            "current": _page_url(route, page),
            "prev": _page_url(route, page - 1) if page > 1 else None,
            "next": _page_url(route, page + 1) if page < last_page else None,
        },
    }
