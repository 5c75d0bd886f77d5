"""Tests for bitbucket_server.client.lib.utils module."""

import aiohttp
import pytest

from bitbucket_server.client.lib.utils import build_form
from bitbucket_server.client.lib.utils import build_params
from bitbucket_server.client.lib.utils import join_path
from bitbucket_server.client.lib.utils import normalize_path
from bitbucket_server.client.lib.utils import quote_path
from bitbucket_server.client.lib.utils import read_text


class TestNormalizePath:
    """Tests for normalize_path function."""

    @pytest.mark.parametrize("path", [None, "", "/"])
    def test_empty_paths(self, path):
        assert normalize_path(path) is None

    @pytest.mark.parametrize("path", ["src", "some/random/path", "/src", "src/"])
    def test_other_paths_unchanged(self, path):
        assert normalize_path(path) == path


class TestJoinPath:
    """Tests for join_path function."""

    @pytest.mark.parametrize("path", [None, "", "/"])
    def test_no_suffix(self, path):
        assert join_path("projects/P/repos/r/files", path) == "projects/P/repos/r/files"

    def test_suffix(self):
        assert join_path("projects/P/repos/r/files", "some/dir") == "projects/P/repos/r/files/some/dir"

    def test_suffix_is_encoded(self):
        assert join_path("projects/P/repos/r/files", "a#b/c?d") == "projects/P/repos/r/files/a%23b/c%3Fd"


class TestQuotePath:
    """Tests for quote_path function."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("some/random/path/MyFile.txt", "some/random/path/MyFile.txt"),
            ("dir/notes#1.md", "dir/notes%231.md"),
            ("dir/what?.md", "dir/what%3F.md"),
            ("dir/100%.md", "dir/100%25.md"),
            ("a b/c&d=e.txt", "a%20b/c%26d%3De.txt"),
        ],
    )
    def test_reserved_characters(self, path, expected):
        assert quote_path(path) == expected


class TestBuildParams:
    """Tests for build_params function."""

    def test_drops_none(self):
        assert build_params(at=None, start=None, limit=None) == {}

    def test_keeps_integers(self):
        params = build_params(at="main", start=0, limit=25)
        assert params == {"at": "main", "start": 0, "limit": 25}
        assert isinstance(params["start"], int)

    def test_booleans(self):
        assert build_params(blame=True, noContent=False) == {"blame": "true"}


class TestBuildForm:
    """Tests for build_form function."""

    def test_multipart_skips_none(self):
        form = build_form({"branch": "main", "content": "x", "message": None})
        assert isinstance(form, aiohttp.FormData)
        assert form.is_multipart
        names = [field[0]["name"] for field in form._fields]
        assert names == ["branch", "content"]


@pytest.mark.asyncio
async def test_read_text(tmp_path):
    """Test read_text returns the file content."""
    path = tmp_path / "content.txt"
    path.write_text("new content\n")
    assert await read_text(str(path)) == "new content\n"
