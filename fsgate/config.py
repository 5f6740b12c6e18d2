from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env', env_file_encoding='utf-8', extra='ignore', populate_by_name=True
    )

    app_name: str = 'fsgate'
    app_host: str = '127.0.0.1'
    app_port: int = Field(default=8765, ge=1, le=65535)
    server_name: str = 'file-manager'
    server_version: str = '0.1.0'
    base_path: str = Field(default='', validation_alias=AliasChoices('MCP_FILE_BASE_PATH', 'BASE_PATH'))
    log_level: str = 'info'


@dataclass(frozen=True)
class GatewayRoot:
    path: Path

    def __str__(self) -> str:
        return str(self.path)


def load_root(config: Settings) -> GatewayRoot:
    raw = config.base_path.strip() or os.getcwd()
    return GatewayRoot(Path(os.path.normpath(os.path.abspath(os.path.expanduser(raw)))))


def ensure_root(root: GatewayRoot) -> GatewayRoot:
    if not root.path.exists():
        raise RuntimeError(f'Root directory {root} does not exist. Set MCP_FILE_BASE_PATH to an existing directory')
    if not root.path.is_dir():
        raise RuntimeError(f'Root path {root} is not a directory')
    return root


settings = Settings()
