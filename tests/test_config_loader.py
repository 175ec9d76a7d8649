# tests/test_config_loader.py
import json
from pathlib import Path

from storefront_app.services.config_loader import ConfigLoader


def test_no_file_no_env_is_absent(tmp_path: Path):
    assert ConfigLoader(tmp_path / ".mcp-config.json").load_config() is None


def test_config_file_wins_over_env(tmp_path: Path, monkeypatch):
    path = tmp_path / ".mcp-config.json"
    path.write_text(json.dumps({
        "shopDomain": "file-shop.myshopify.com",
        "accessToken": "file-token",
        "apiVersion": "2024-04",
    }), encoding="utf-8")
    monkeypatch.setenv("STOREFRONT_SHOP_DOMAIN", "env-shop.myshopify.com")
    monkeypatch.setenv("STOREFRONT_ACCESS_TOKEN", "env-token")

    cfg = ConfigLoader(path).load_config()
    assert cfg.shopDomain == "file-shop.myshopify.com"
    assert cfg.accessToken == "file-token"
    assert cfg.apiVersion == "2024-04"


def test_malformed_file_falls_back_to_env(tmp_path: Path, monkeypatch):
    path = tmp_path / ".mcp-config.json"
    path.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("STOREFRONT_SHOP_DOMAIN", "env-shop.myshopify.com")
    monkeypatch.setenv("STOREFRONT_ACCESS_TOKEN", "env-token")

    cfg = ConfigLoader(path).load_config()
    assert cfg.shopDomain == "env-shop.myshopify.com"
    assert cfg.apiVersion == "2024-01"


def test_env_requires_domain_and_token(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("STOREFRONT_SHOP_DOMAIN", "env-shop.myshopify.com")
    assert ConfigLoader(tmp_path / ".mcp-config.json").load_config() is None

    monkeypatch.setenv("STOREFRONT_ACCESS_TOKEN", "env-token")
    monkeypatch.setenv("STOREFRONT_API_VERSION", "2025-01")
    cfg = ConfigLoader(tmp_path / ".mcp-config.json").load_config()
    assert cfg.apiVersion == "2025-01"


def test_file_edits_apply_without_restart(tmp_path: Path):
    path = tmp_path / ".mcp-config.json"
    loader = ConfigLoader(path)
    assert loader.load_config() is None

    path.write_text(json.dumps({"shopDomain": "a.myshopify.com", "accessToken": "t"}), encoding="utf-8")
    assert loader.load_config().shopDomain == "a.myshopify.com"
