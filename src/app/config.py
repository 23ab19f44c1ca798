"""
설정 로드: default.yaml + 환경 변수 (.env).

우선순위: 환경 변수 > default.yaml > 코드 기본값
시작 시 한 번만 읽는다 (hot reload 없음).

환경 변수:
- CATALOG_BASE_PATH
- CATALOG_ADMIN_PASSWORD
- CATALOG_STORAGE_ROOT
- CATALOG_ORDERS_PATH
- CATALOG_MAX_UPLOAD_MB
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from src.domain.constants import (
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_BASE_PATH,
    DEFAULT_ORDERS_PATH,
    DEFAULT_STORAGE_ROOT,
    UPLOAD_MAX_SIZE_MB,
)

PROJECT_ROOT = Path(__file__).parent.parent.parent


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


@dataclass
class Settings:
    """실행 설정."""
    base_path: str
    admin_password: str
    storage_root: Path
    orders_path: Path
    max_upload_mb: int = UPLOAD_MAX_SIZE_MB


def _resolve(path_value: str) -> Path:
    path = Path(path_value)
    return path if path.is_absolute() else PROJECT_ROOT / path


def load_settings(
    config: dict | None = None,
    env: dict[str, str] | None = None,
) -> Settings:
    """
    설정 병합.

    Args:
        config: default.yaml 내용 (None이면 로드)
        env: 환경 변수 (None이면 .env 로드 후 os.environ)
    """
    if config is None:
        config = load_config()
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    app_cfg = config.get("app", {}) or {}
    storage_cfg = config.get("storage", {}) or {}
    orders_cfg = config.get("orders", {}) or {}
    admin_cfg = config.get("admin", {}) or {}

    return Settings(
        base_path=env.get("CATALOG_BASE_PATH")
        or app_cfg.get("base_path", DEFAULT_BASE_PATH),
        admin_password=env.get("CATALOG_ADMIN_PASSWORD")
        or admin_cfg.get("password", DEFAULT_ADMIN_PASSWORD),
        storage_root=_resolve(
            env.get("CATALOG_STORAGE_ROOT")
            or storage_cfg.get("root", DEFAULT_STORAGE_ROOT)
        ),
        orders_path=_resolve(
            env.get("CATALOG_ORDERS_PATH")
            or orders_cfg.get("path", DEFAULT_ORDERS_PATH)
        ),
        max_upload_mb=int(
            env.get("CATALOG_MAX_UPLOAD_MB")
            or storage_cfg.get("max_upload_mb", UPLOAD_MAX_SIZE_MB)
        ),
    )
