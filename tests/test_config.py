"""Tests for site constants, base path handling and settings overrides."""

import json
import os
from unittest.mock import patch

import pytest

import config
from config import CATEGORIES, PAGINATION, SITE, SOCIAL, get_base, get_build_config

# ---------------------------------------------------------------------------
# get_base
# ---------------------------------------------------------------------------


def test_get_base_adds_slash():
    assert get_base("/a/b") == "/a/b/"


def test_get_base_keeps_slash():
    assert get_base("/a/b/") == "/a/b/"


@pytest.mark.parametrize("base", ["", "/", "//", "/a", "/a/b//", "relative/path"])
def test_get_base_single_trailing_slash_and_idempotent(base):
    result = get_base(base)
    assert result.endswith("/")
    assert not result.endswith("//")
    assert get_base(result) == result


def test_get_base_defaults_to_configured_base():
    assert get_base() == "/squiggly-lines/"
    with patch("config.BASE_PATH", "/blog"):
        assert get_base() == "/blog/"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------


def test_site_constants():
    assert SITE["name"] == "squiggly lines"
    assert SITE["tagline"] == "perfectly imperfect"
    assert SOCIAL["email"].startswith("mailto:")
    assert PAGINATION["per_page"] == 8
    assert CATEGORIES == ("art", "dev", "make", "misc")


def test_constants_are_read_only():
    with pytest.raises(TypeError):
        SITE["name"] = "other"


def test_build_config():
    cfg = get_build_config()
    assert cfg["site"] == "https://slesaad.github.io"
    assert cfg["base"] == "/squiggly-lines"
    assert cfg["integrations"] == ["mdx", "sitemap", "svelte"]


# ---------------------------------------------------------------------------
# _read_setting
# ---------------------------------------------------------------------------


def test_read_setting_nested(tmp_path):
    settings = tmp_path / "site.json"
    settings.write_text(json.dumps({"content": {"dir": "/srv/posts"}}))
    with patch.object(config, "_SETTINGS_FILE", str(settings)):
        assert config._read_setting("content", "dir") == "/srv/posts"
        assert config._read_setting("content", "pattern", default="*.md") == "*.md"


def test_read_setting_missing_file(tmp_path):
    with patch.object(config, "_SETTINGS_FILE", str(tmp_path / "nope.json")):
        assert config._read_setting("base_path", default="/x") == "/x"


def test_read_setting_bad_json(tmp_path):
    settings = tmp_path / "site.json"
    settings.write_text("{not json")
    with patch.object(config, "_SETTINGS_FILE", str(settings)):
        assert config._read_setting("site_url", default="d") == "d"


# ---------------------------------------------------------------------------
# _project_path
# ---------------------------------------------------------------------------


def test_project_path_relative_dir():
    assert config._project_path("posts") == os.path.join(config.PROJECT_DIR, "posts")


def test_project_path_absolute_dir(tmp_path):
    assert config._project_path(str(tmp_path)) == str(tmp_path)


def test_default_content_dir_under_project():
    assert config.CONTENT_DIR == os.path.join(config.PROJECT_DIR, "src", "content", "posts")
