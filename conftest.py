"""Pytest configuration: ensures the project root is importable."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep VCF_HEADER_* variables (and any local .env) out of the tests."""
    for name in ("VCF_HEADER_DEFAULT_VERSION", "VCF_HEADER_LOG_LEVEL", "VCF_HEADER_MAX_BATCH_LINES"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("vcf_header.config.load_dotenv", lambda *args, **kwargs: False)
    yield
