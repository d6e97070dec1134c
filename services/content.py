"""Post collection loader: discover content files, parse frontmatter, validate."""

import fnmatch
import logging
import os
import re

import yaml

from config import CONTENT_DIR, CONTENT_PATTERN
from services.schema import ValidationFailure, validate_post

log = logging.getLogger(__name__)

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


class _FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps impossible timestamps (2024-02-30) as plain strings."""


def _construct_timestamp(loader, node):
    try:
        return yaml.SafeLoader.construct_yaml_timestamp(loader, node)
    except ValueError:
        return loader.construct_scalar(node)


_FrontmatterLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_timestamp)


def parse_frontmatter(content: str) -> tuple[dict, str]:
    """Extract YAML frontmatter and body from file content.

    Returns ({}, content) when there is no closed frontmatter block.
    Raises yaml.YAMLError on malformed YAML and TypeError when the block
    is not a mapping.
    """
    if not content.startswith("---"):
        return {}, content

    lines = content.split("\n")
    end_idx = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    frontmatter = yaml.load("\n".join(lines[1:end_idx]), Loader=_FrontmatterLoader) or {}
    if not isinstance(frontmatter, dict):
        raise TypeError(f"frontmatter must be a mapping, got {type(frontmatter).__name__}")
    body = "\n".join(lines[end_idx + 1 :]).lstrip("\n")
    return frontmatter, body


def expand_braces(pattern: str) -> list[str]:
    """Expand {a,b} alternatives: "**/*.{md,mdx}" -> ["**/*.md", "**/*.mdx"]."""
    match = _BRACE_RE.search(pattern)
    if not match:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def _matches(rel_path: str, pattern: str) -> bool:
    """Match a /-separated relative path against a glob where ** spans directories."""
    if pattern.startswith("**/"):
        # "**/" also matches zero directories
        return _matches(rel_path, pattern[3:]) or any(
            _matches(rel_path[i + 1 :], pattern)
            for i, ch in enumerate(rel_path)
            if ch == "/"
        )
    if "/" not in pattern:
        return "/" not in rel_path and fnmatch.fnmatchcase(rel_path, pattern)
    head, rest = pattern.split("/", 1)
    if "/" not in rel_path:
        return False
    first, remainder = rel_path.split("/", 1)
    return fnmatch.fnmatchcase(first, head) and _matches(remainder, rest)


def discover(base: str = None, pattern: str = None) -> list[str]:
    """Return relative paths (/-separated) of files under base matching pattern.

    Hidden and underscore-prefixed files and directories are skipped.
    """
    base = base or CONTENT_DIR
    pattern = pattern or CONTENT_PATTERN
    if not os.path.isdir(base):
        log.warning("Content directory not found: %s", base)
        return []

    patterns = expand_braces(pattern)
    found = []
    for root, dirs, files in os.walk(base):
        dirs[:] = sorted(d for d in dirs if not d.startswith((".", "_")))
        rel_root = os.path.relpath(root, base)
        for fname in files:
            if fname.startswith((".", "_")):
                continue
            rel_path = (
                fname if rel_root == "." else os.path.join(rel_root, fname).replace(os.sep, "/")
            )
            if any(_matches(rel_path, p) for p in patterns):
                found.append(rel_path)
    return sorted(found)


def load_post(rel_path: str, base: str = None) -> dict:
    """Read and validate one content file. Returns {id, path, data, body}.

    Raises ValidationFailure if the frontmatter does not match the post schema.
    """
    base = base or CONTENT_DIR
    abs_path = os.path.join(base, rel_path)
    try:
        with open(abs_path, encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise ValidationFailure(
            rel_path, [{"field": "frontmatter", "message": "not valid UTF-8"}]
        ) from e

    try:
        fm, body = parse_frontmatter(content)
    except (yaml.YAMLError, TypeError) as e:
        raise ValidationFailure(
            rel_path, [{"field": "frontmatter", "message": f"unreadable frontmatter: {e}"}]
        ) from e

    record, errors = validate_post(fm)
    if errors:
        raise ValidationFailure(rel_path, errors)
    return {"id": rel_path, "path": abs_path, "data": record, "body": body}


def load_collection(base: str = None, pattern: str = None) -> dict[str, dict]:
    """Load every post under base. Returns {id: entry}.

    Fails on the first invalid file; no partial collection is returned.
    """
    base = base or CONTENT_DIR
    collection = {}
    for rel_path in discover(base, pattern):
        try:
            collection[rel_path] = load_post(rel_path, base)
        except ValidationFailure as e:
            log.error("Invalid post %s: %s", rel_path, ", ".join(e.fields))
            raise
    log.info("Loaded %d posts from %s", len(collection), base)
    return collection
