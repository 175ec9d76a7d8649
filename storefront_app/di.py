# storefront_app/di.py
from dataclasses import dataclass
from storefront_app.config import Settings
from storefront_app.services.config_loader import ConfigLoader
from storefront_app.services.project_files import ProjectFileService
from storefront_app.services.resources import ResourceService
from storefront_app.services.storefront import StorefrontHttpClient, StorefrontService
from storefront_app.services.wasm_build import WasmBuildService

@dataclass
class Container:
    settings: Settings
    storefront_service: StorefrontService
    project_files: ProjectFileService
    wasm_build_service: WasmBuildService
    resource_service: ResourceService

def build_container(settings: Settings | None = None) -> Container:
    s = settings or Settings()
    root = s.PROJECT_ROOT.resolve()

    storefront = StorefrontService(
        config_loader=ConfigLoader(root / s.MCP_CONFIG_FILE),
        http_client=StorefrontHttpClient(),
    )

    files = ProjectFileService(
        root,
        wasm_source_dir=s.WASM_SOURCE_DIR,
        theme_assets_dir=s.THEME_ASSETS_DIR,
    )

    wasm = WasmBuildService(out_dir=root / s.WASM_OUT_DIR)
    resources = ResourceService(root)

    return Container(s, storefront, files, wasm, resources)
