# storefront_app/services/wasm_build.py
from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Tuple

EXPECTED_FILES: Tuple[str, ...] = (
    "storefront_api_wasm.js",
    "storefront_api_wasm_bg.wasm",
)


def _iso_mtime(ts: float) -> str:
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class WasmBuildService:
    """
    Build helpers for the storefront-api-wasm crate. Nothing here runs the
    toolchain: instructions are text and the status check only stats files.
    """
    out_dir: Path
    expected_files: Tuple[str, ...] = EXPECTED_FILES

    def build_instructions(self, target: str = "web") -> str:
        script = "build.bat" if sys.platform == "win32" else "./build.sh"
        return (
            "To build the WebAssembly module, run:\n\n"
            "cd storefront-api-wasm\n"
            f"{script}\n\n"
            "Or manually:\n"
            f"wasm-pack build --target {target} --out-dir ../Liquid-main/assets/wasm --release\n\n"
            "The build will create files in Liquid-main/assets/wasm/"
        )

    def check_build_status(self) -> Dict[str, Any]:
        status: Dict[str, Any] = {"built": False, "files": [], "missing": []}

        if not self.out_dir.is_dir():
            status["missing"] = list(self.expected_files)
            return status

        present: List[str] = sorted(p.name for p in self.out_dir.iterdir())
        status["files"] = present

        for name in self.expected_files:
            if name in present:
                st = (self.out_dir / name).stat()
                status[name] = {
                    "exists": True,
                    "size": st.st_size,
                    "modified": _iso_mtime(st.st_mtime),
                }
            else:
                status["missing"].append(name)

        status["built"] = not status["missing"]
        return status
