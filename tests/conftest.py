"""Shared test fixtures."""

import pytest


@pytest.fixture
def project_dir(tmp_path):
    """Temporary project root for manifest and definition writes."""
    d = tmp_path / "project"
    d.mkdir()
    return d


@pytest.fixture
def cache_dir(tmp_path):
    """Temporary HTTP cache root."""
    return tmp_path / "cache" / "http"
