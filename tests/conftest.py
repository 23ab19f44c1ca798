"""
Pytest fixtures for the catalog admin tests.

테스트 구성:
- 저장소 fixture는 tmp_path 위에 카탈로그 폴더 구조를 만든다
- 앱 fixture는 tmp 저장소를 가리키는 Settings로 app.state를 초기화한다
"""

from collections.abc import Generator
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from src.app.config import Settings
from src.app.main import app, init_state
from src.app.services import FileStore, OrderStore

ADMIN_PASSWORD = "test-secret"
BASE_PATH = "/catalogointerativo"

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """
    카탈로그 저장소.

    포함:
    - bags/ (이미지: B1.png, B2.jpg)
    - shoes/sandals/ (이미지: A1.jpg)
    - shoes/boots/ (빈 폴더)
    - .hidden/ (숨김, 목록 제외)
    - readme.txt (이미지 아님, 목록 제외)
    """
    root = tmp_path / "files"
    (root / "bags").mkdir(parents=True)
    (root / "shoes" / "sandals").mkdir(parents=True)
    (root / "shoes" / "boots").mkdir(parents=True)
    (root / ".hidden").mkdir()

    (root / "bags" / "B1.png").write_bytes(b"fake png")
    (root / "bags" / "B2.jpg").write_bytes(b"fake jpg")
    (root / "shoes" / "sandals" / "A1.jpg").write_bytes(b"fake jpg")
    (root / "readme.txt").write_text("not an image", encoding="utf-8")

    return root


@pytest.fixture
def file_store(storage_root: Path) -> FileStore:
    """tmp 저장소 위의 FileStore."""
    return FileStore(storage_root, base_path=BASE_PATH)


@pytest.fixture
def orders_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "orders.json"


@pytest.fixture
def order_store(orders_path: Path) -> OrderStore:
    return OrderStore(orders_path)


@pytest.fixture
def sample_order() -> dict:
    """정상 주문 body."""
    return {
        "customerName": "홍길동",
        "customerPhone": "010-1234-5678",
        "notes": "빠른 배송 부탁드립니다",
        "items": [
            {"code": "A1", "name": "A1.jpg", "category": "sandals", "quantity": 2},
            {"code": "B1", "name": "B1.png", "category": "bags"},
        ],
    }


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def settings(storage_root: Path, orders_path: Path) -> Settings:
    """테스트용 설정."""
    return Settings(
        base_path=BASE_PATH,
        admin_password=ADMIN_PASSWORD,
        storage_root=storage_root,
        orders_path=orders_path,
        max_upload_mb=1,
    )


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """tmp 저장소를 사용하는 FastAPI TestClient."""
    init_state(app, settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD
