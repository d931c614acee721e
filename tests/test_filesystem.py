"""Tests for harvester.services.filesystem."""

import os
import stat

from harvester.services.filesystem import (
    directory_exists,
    ensure_directory,
    file_exists,
    read_text,
    write_cache,
)


class TestExistenceChecks:
    def test_file_exists_for_regular_file(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("x")
        assert file_exists(str(path)) is True

    def test_file_exists_false_for_directory(self, tmp_path):
        assert file_exists(str(tmp_path)) is False

    def test_file_exists_false_when_missing(self, tmp_path):
        assert file_exists(str(tmp_path / "missing")) is False

    def test_directory_exists(self, tmp_path):
        assert directory_exists(str(tmp_path)) is True
        assert directory_exists(str(tmp_path / "missing")) is False


class TestEnsureDirectory:
    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "PDFs"
        assert ensure_directory(str(target)) is True
        assert target.is_dir()

    def test_default_mode_is_owner_rwx_others_rx(self, tmp_path):
        target = tmp_path / "PDFs"
        old_umask = os.umask(0o022)
        try:
            ensure_directory(str(target))
        finally:
            os.umask(old_umask)
        assert stat.S_IMODE(target.stat().st_mode) == 0o755

    def test_existing_directory_is_ok(self, tmp_path):
        assert ensure_directory(str(tmp_path)) is True

    def test_failure_is_reported_not_raised(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        assert ensure_directory(str(blocker / "sub")) is False


class TestCacheFile:
    def test_write_then_read(self, tmp_path):
        path = str(tmp_path / "page.html")
        assert write_cache(path, "<html></html>") is True
        assert read_text(path) == "<html></html>\n"

    def test_write_overwrites_previous_content(self, tmp_path):
        path = str(tmp_path / "page.html")
        write_cache(path, "first")
        write_cache(path, "second")
        assert read_text(path) == "second\n"

    def test_read_missing_returns_empty(self, tmp_path):
        assert read_text(str(tmp_path / "missing.html")) == ""

    def test_write_into_missing_directory_fails(self, tmp_path):
        assert write_cache(str(tmp_path / "nope" / "page.html"), "x") is False
