"""Site constants and build configuration for squiggly lines."""

import json
import os
from types import MappingProxyType

PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))
_SETTINGS_FILE = os.path.join(PROJECT_DIR, "site.json")


def _read_setting(*keys, default=None):
    """Read a nested setting from the site settings file."""
    try:
        with open(_SETTINGS_FILE) as f:
            data = json.load(f)
        for k in keys:
            data = data[k]
        return data
    except (FileNotFoundError, json.JSONDecodeError, KeyError, TypeError):
        return default


SITE = MappingProxyType(
    {
        "name": "squiggly lines",
        "title": "squiggly lines",
        "tagline": "perfectly imperfect",
        "author": "slesa",
        "company": "@saanostory ink.",
    }
)

SOCIAL = MappingProxyType(
    {
        "instagram": "https://www.instagram.com/saanostory/",
        "github": "https://github.com/slesaad/",
        "email": "mailto:slesaad@gmail.com",
        "website": "https://slesa.com.np",
        "linkedin": "https://linkedin.com/in/slesaad",
    }
)

PAGINATION = MappingProxyType({"per_page": 8})

# Post categories, in display order. The post schema validates against this tuple.
CATEGORIES = ("art", "dev", "make", "misc")

# Build configuration handed to the site generator.
SITE_URL = _read_setting("site_url", default="https://slesaad.github.io")
BASE_PATH = _read_setting("base_path", default="/squiggly-lines")
INTEGRATIONS = ("mdx", "sitemap", "svelte")


def _project_path(path: str) -> str:
    """Resolve a settings path against the project root. Absolute paths pass through."""
    return os.path.join(PROJECT_DIR, path)


CONTENT_DIR = _project_path(
    _read_setting("content", "dir", default=os.path.join("src", "content", "posts"))
)
CONTENT_PATTERN = _read_setting("content", "pattern", default="**/*.{md,mdx}")


def get_base(base=None) -> str:
    """Return the base path with exactly one trailing slash.

    Defaults to the configured BASE_PATH. "/a/b" and "/a/b/" both give "/a/b/".
    """
    if base is None:
        base = BASE_PATH
    return base.rstrip("/") + "/"


def get_build_config() -> dict:
    """Return the site origin, base path and enabled integrations."""
    return {
        "site": SITE_URL,
        "base": BASE_PATH,
        "integrations": list(INTEGRATIONS),
    }
