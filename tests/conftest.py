"""Shared fixtures for kiwi tests."""

from __future__ import annotations

import pytest

from kiwi.config import TemplateOptions


class ParentTemplate:
    """Minimal parent exposing `options.path`."""

    def __init__(self, path: str | None):
        self.options = TemplateOptions(path=path)


class FakeFiles:
    """In-memory existence check that records every probe."""

    def __init__(self, *paths: str):
        self.paths = set(paths)
        self.probes: list[str] = []

    async def exists(self, path: str) -> bool:
        self.probes.append(path)
        return path in self.paths


@pytest.fixture
def parent_factory():
    return ParentTemplate


@pytest.fixture
def files_factory():
    return FakeFiles
