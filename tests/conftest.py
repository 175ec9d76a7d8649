# tests/conftest.py
from pathlib import Path

import pytest

from storefront_app.config import Settings
from storefront_app.di import build_container


@pytest.fixture(autouse=True)
def no_storefront_env(monkeypatch):
    for name in ("STOREFRONT_SHOP_DOMAIN", "STOREFRONT_ACCESS_TOKEN", "STOREFRONT_API_VERSION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def container(tmp_path: Path):
    return build_container(Settings(PROJECT_ROOT=tmp_path))
