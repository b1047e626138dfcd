# tests/unit/storage/test_file_source.py — v1
"""Tests for storage/file_source.py."""

from __future__ import annotations

import pytest

from filerenamer.storage.file_source import LocalFileSource


class TestLocalFileSource:
    @pytest.mark.asyncio
    async def test_reads_absolute_path(self, tmp_path):
        pdf = tmp_path / "scan.pdf"
        pdf.write_bytes(b"%PDF-1.4 body")
        assert await LocalFileSource().fetch_bytes(str(pdf)) == b"%PDF-1.4 body"

    @pytest.mark.asyncio
    async def test_relative_path_under_root(self, tmp_path):
        (tmp_path / "inbox").mkdir()
        (tmp_path / "inbox" / "a.pdf").write_bytes(b"data")
        source = LocalFileSource(root=tmp_path)
        assert await source.fetch_bytes("inbox/a.pdf") == b"data"
        assert source.resolve("inbox/a.pdf") == tmp_path / "inbox" / "a.pdf"

    @pytest.mark.asyncio
    async def test_missing_file_returns_none(self, tmp_path):
        assert await LocalFileSource(root=tmp_path).fetch_bytes("nope.pdf") is None

    @pytest.mark.asyncio
    async def test_directory_returns_none(self, tmp_path):
        assert await LocalFileSource().fetch_bytes(str(tmp_path)) is None

    @pytest.mark.asyncio
    async def test_empty_file_returns_empty_bytes(self, tmp_path):
        (tmp_path / "empty.pdf").write_bytes(b"")
        assert await LocalFileSource(root=tmp_path).fetch_bytes("empty.pdf") == b""
