# storefront_app/services/resources.py
from __future__ import annotations

from pathlib import Path
from typing import Dict

from storefront_app.services.project_files import read_text_lossy, resolve_in_root

FILE_SCHEME = "file://"

MIME_TYPES: Dict[str, str] = {
    ".rs": "text/x-rust",
    ".js": "application/javascript",
    ".toml": "text/x-toml",
    ".md": "text/markdown",
    ".json": "application/json",
}


class ResourceReadError(RuntimeError):
    pass


def mime_type_for(path: str) -> str:
    return MIME_TYPES.get(Path(path).suffix, "text/plain")


class ResourceService:
    """
    Serve file:// resources relative to the project root.
    """

    def __init__(self, root: Path):
        self.root = root.resolve()

    def _locate(self, rel: str) -> Path:
        rel = rel.rstrip("/")
        p = resolve_in_root(self.root, rel)
        if p.exists():
            return p
        # URL normalisation lowercases the first segment of a file:// URI (its host)
        head, _, tail = rel.partition("/")
        for entry in self.root.iterdir():
            if entry.name != head and entry.name.lower() == head.lower():
                return resolve_in_root(self.root, f"{entry.name}/{tail}" if tail else entry.name)
        return p

    def read(self, uri: str) -> Dict[str, str]:
        rel = uri[len(FILE_SCHEME):] if uri.startswith(FILE_SCHEME) else uri
        try:
            p = self._locate(rel)
            text = read_text_lossy(p)
        except OSError as e:
            raise ResourceReadError(f"Failed to read resource: {e}") from e
        return {"uri": uri, "mimeType": mime_type_for(p.name), "text": text}
