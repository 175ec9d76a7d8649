# tests/test_resources.py
from pathlib import Path

import pytest

from storefront_app.services.resources import ResourceReadError, ResourceService, mime_type_for


@pytest.mark.parametrize("name, mime", [
    ("lib.rs", "text/x-rust"),
    ("storefront-api.js", "application/javascript"),
    ("Cargo.toml", "text/x-toml"),
    ("README.md", "text/markdown"),
    ("package.json", "application/json"),
    ("notes.xyz", "text/plain"),
    ("Makefile", "text/plain"),
])
def test_mime_table(name, mime):
    assert mime_type_for(name) == mime


def test_read_resource_round_trip(tmp_path: Path):
    src = tmp_path / "storefront-api-wasm" / "src"
    src.mkdir(parents=True)
    raw = "use wasm_bindgen::prelude::*;\n\n// ünïcode\n"
    (src / "lib.rs").write_text(raw, encoding="utf-8")

    out = ResourceService(tmp_path).read("file://storefront-api-wasm/src/lib.rs")

    assert out == {
        "uri": "file://storefront-api-wasm/src/lib.rs",
        "mimeType": "text/x-rust",
        "text": raw,
    }


def test_read_unknown_extension_is_plain_text(tmp_path: Path):
    (tmp_path / "build.log").write_text("ok", encoding="utf-8")
    out = ResourceService(tmp_path).read("file://build.log")
    assert out["mimeType"] == "text/plain"
    assert out["text"] == "ok"


def test_read_missing_resource(tmp_path: Path):
    with pytest.raises(ResourceReadError, match="Failed to read resource"):
        ResourceService(tmp_path).read("file://storefront-api-wasm/Cargo.toml")


def test_read_resource_outside_root(tmp_path: Path):
    root = tmp_path / "project"
    root.mkdir()
    (tmp_path / "outside.md").write_text("secret", encoding="utf-8")
    with pytest.raises(ResourceReadError, match="escapes project root"):
        ResourceService(root).read("file://../outside.md")


def test_read_binary_resource_does_not_raise(tmp_path: Path):
    (tmp_path / "x.wasm").write_bytes(b"\x00asm\xff\xfe")

    out = ResourceService(tmp_path).read("file://x.wasm")

    assert out["mimeType"] == "text/plain"
    assert out["text"].startswith("\x00asm")
    assert "�" in out["text"]


def test_read_recovers_lowercased_first_segment(tmp_path: Path):
    assets = tmp_path / "Liquid-main" / "assets"
    assets.mkdir(parents=True)
    (assets / "storefront-api.js").write_text("export {};", encoding="utf-8")
    (tmp_path / "README.md").write_text("# readme", encoding="utf-8")

    svc = ResourceService(tmp_path)
    assert svc.read("file://liquid-main/assets/storefront-api.js")["text"] == "export {};"
    out = svc.read("file://readme.md/")
    assert out["text"] == "# readme"
    assert out["mimeType"] == "text/markdown"
