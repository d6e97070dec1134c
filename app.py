#!/usr/bin/env python3
"""squiggly lines: validate and inspect the post collection before a site build."""

import argparse
import json
import logging
import sys

from config import CATEGORIES, SITE, get_build_config
from services.content import load_collection
from services.posts import group_by_category, paginate, published, sort_by_date
from services.schema import ValidationFailure


def _check(collection: dict, _args) -> int:
    entries = list(collection.values())
    drafts = sum(1 for e in entries if e["data"]["draft"])
    print(f"\n  {SITE['title']}: {len(entries)} posts ({drafts} drafts)")
    for category, items in group_by_category(entries).items():
        print(f"  {category:<6} {len(items)}")
    print()
    return 0


def _list(collection: dict, args) -> int:
    entries = list(collection.values()) if args.drafts else published(collection)
    if args.category:
        entries = group_by_category(entries)[args.category]
    route = f"category/{args.category}" if args.category else ""
    try:
        page = paginate(sort_by_date(entries), page=args.page, route=route)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    for entry in page["data"]:
        data = entry["data"]
        marker = " (draft)" if data["draft"] else ""
        print(f"{data['date'].isoformat()}  {data['category']:<5} {data['title']}{marker}  [{entry['id']}]")
    print(f"-- page {page['current_page']}/{page['last_page']} ({page['total']} posts) {page['url']['current']}")
    return 0


def main(argv=None):
    """Entry point for the `squiggly` CLI command."""
    parser = argparse.ArgumentParser(description="squiggly lines content tools")
    parser.add_argument("--content-dir", help="Directory holding post files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Validate every post and print a summary")

    list_parser = sub.add_parser("list", help="List posts, newest first")
    list_parser.add_argument("--category", choices=CATEGORIES)
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--drafts", action="store_true", help="Include drafts")

    sub.add_parser("config", help="Print the build configuration")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "config":
        print(json.dumps(get_build_config(), indent=2))
        return 0

    try:
        collection = load_collection(base=args.content_dir)
    except ValidationFailure as e:
        print(f"Invalid post: {e.path}", file=sys.stderr)
        for err in e.errors:
            print(f"  {err['field']}: {err['message']}", file=sys.stderr)
        return 1

    handler = _check if args.command == "check" else _list
    return handler(collection, args)


if __name__ == "__main__":
    sys.exit(main())
