# storefront_app/services/project_files.py
from pathlib import Path


def resolve_in_root(root: Path, rel: str) -> Path:
    root = root.resolve()
    p = (root / rel).resolve()
    # Prevent path traversal / symlink escape
    if p != root and root not in p.parents:
        raise PermissionError(f"Path escapes project root: {rel}")
    return p


def read_text_lossy(p: Path) -> str:
    # Undecodable bytes (e.g. a .wasm binary) become U+FFFD instead of raising
    return p.read_text(encoding="utf-8", errors="replace")


class ProjectFileService:
    """
    Read-only access to the WebAssembly crate sources and the theme's JS
    wrappers. File arguments are relative to their base directory and may
    reach anywhere inside the project root, but not outside it.
    """

    def __init__(self, root: Path, wasm_source_dir: str, theme_assets_dir: str):
        self.root = root.resolve()
        self.wasm_source_dir = wasm_source_dir
        self.theme_assets_dir = theme_assets_dir

    def _read(self, base: str, file: str) -> str:
        p = resolve_in_root(self.root, str(Path(base) / file))
        return read_text_lossy(p)

    def read_rust_code(self, file: str = "lib.rs") -> str:
        try:
            content = self._read(self.wasm_source_dir, file)
        except OSError as e:
            raise OSError(f"Failed to read Rust file: {e}") from e
        return f"# {file}\n\n```rust\n{content}\n```"

    def read_js_wrapper(self, file: str | None) -> str:
        if not file:
            raise ValueError("JavaScript wrapper file is required")
        try:
            content = self._read(self.theme_assets_dir, file)
        except OSError as e:
            raise OSError(f"Failed to read JavaScript file: {e}") from e
        return f"# {file}\n\n```javascript\n{content}\n```"
