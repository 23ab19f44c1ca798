"""
JSON 파일 저장소 헬퍼: 원자적 쓰기 + 파일 락.

규칙:
- 원자적 쓰기: 임시 파일 → os.replace
- read-modify-write는 FileLock으로 보호
- fsync 미지원 환경은 경고만
- 파싱 실패 → CatalogError (조용한 복구 금지)
"""

import json
import logging
import os
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout

from src.domain.errors import CatalogError, ErrorCodes

logger = logging.getLogger(__name__)

# 락 timeout (초)
DEFAULT_LOCK_TIMEOUT = 10.0


# =============================================================================
# Lock
# =============================================================================


@contextmanager
def json_file_lock(
    path: Path, timeout: float = DEFAULT_LOCK_TIMEOUT
) -> Generator[None, None, None]:
    """
    JSON 파일 접근용 락.

    사용법:
        with json_file_lock(orders_path):
            data = load_json(orders_path, default=[])
            ...
            atomic_write_json(orders_path, data)

    Raises:
        CatalogError: ORDERS_LOCK_TIMEOUT
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    lock = FileLock(path.with_name(f"{path.name}.lock"), timeout=timeout)

    try:
        lock.acquire()
    except Timeout:
        raise CatalogError(
            ErrorCodes.ORDERS_LOCK_TIMEOUT,
            f"Failed to acquire lock for '{path.name}'",
            timeout=timeout,
        ) from None

    try:
        yield
    finally:
        lock.release()


# =============================================================================
# Read / Write
# =============================================================================


def load_json(path: Path, default: Any = None) -> Any:
    """
    JSON 파일 로드.

    Args:
        path: 파일 경로
        default: 파일이 없을 때 반환할 값

    Raises:
        CatalogError: ORDERS_FILE_CORRUPT (JSON 파싱 실패)
    """
    if not path.exists():
        return default

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogError(
            ErrorCodes.ORDERS_FILE_CORRUPT,
            f"'{path.name}' is not valid JSON",
            path=str(path),
            error=str(e),
        ) from e


def atomic_write_json(path: Path, data: Any) -> None:
    """
    같은 폴더의 임시 파일에 쓴 뒤 os.replace.

    직렬화는 임시 파일을 만들기 전에 끝낸다 (직렬화 실패 시 디스크 변경 없음).
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(data, indent=2, ensure_ascii=False)

    fd, temp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError as e:
                logger.warning(f"fsync skipped for {path.name}: {e}")
        os.replace(temp_path, path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise
