"""Shared fixtures for saladplate tests."""

import asyncio

import pytest

from saladplate import Options, template


@pytest.fixture
def render():
    """Synchronous wrapper around the async template() entry point."""
    def _render(content, source=None, **options):
        return asyncio.run(template(content, source, Options(**options)))
    return _render


@pytest.fixture
def clean_env(monkeypatch):
    """Remove the variables tests rely on being unset."""
    for name in ("FOO", "BAR", "SALADPLATE_TEST_VAR"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
