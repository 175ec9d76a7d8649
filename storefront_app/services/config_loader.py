# storefront_app/services/config_loader.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional, Tuple

from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2024-01"


class ApiConfig(BaseModel):
    """Credentials needed to call the Storefront API for one shop."""
    shopDomain: str
    accessToken: str
    apiVersion: str = DEFAULT_API_VERSION


class StorefrontEnv(BaseSettings):
    """
    STOREFRONT_* process environment. No env_file: the config file and the
    real environment are the only sources consulted.
    """
    SHOP_DOMAIN: Optional[str] = None
    ACCESS_TOKEN: Optional[str] = None
    API_VERSION: str = DEFAULT_API_VERSION

    class Config:
        env_prefix = "STOREFRONT_"


Resolver = Callable[[], Optional[ApiConfig]]


def from_config_file(path: Path) -> Resolver:
    def resolve() -> Optional[ApiConfig]:
        if not path.is_file():
            return None
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return ApiConfig.model_validate(raw)
        except (OSError, ValueError, ValidationError) as e:
            # Unreadable or malformed config falls through to the next source
            logger.debug("ignoring config file %s: %s", path, e)
            return None
    return resolve


def from_environment() -> Optional[ApiConfig]:
    env = StorefrontEnv()
    if not (env.SHOP_DOMAIN and env.ACCESS_TOKEN):
        return None
    return ApiConfig(
        shopDomain=env.SHOP_DOMAIN,
        accessToken=env.ACCESS_TOKEN,
        apiVersion=env.API_VERSION or DEFAULT_API_VERSION,
    )


class ConfigLoader:
    """
    Resolve ApiConfig from an ordered chain of resolvers; first hit wins.
    Nothing is cached, so edits to the config file apply on the next call.
    """

    def __init__(self, config_path: Path):
        self.config_path = config_path
        self.resolvers: Tuple[Resolver, ...] = (
            from_config_file(config_path),
            from_environment,
        )

    def load_config(self) -> Optional[ApiConfig]:
        for resolve in self.resolvers:
            config = resolve()
            if config is not None:
                return config
        return None
