"""
test_jsonfile.py - JSON 파일 락 + 원자적 쓰기 테스트
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from filelock import Timeout

from src.core.jsonfile import atomic_write_json, json_file_lock, load_json
from src.domain.errors import CatalogError, ErrorCodes


class TestJsonFileLock:
    """json_file_lock 컨텍스트 매니저 테스트."""

    def test_lock_file_created_next_to_target(self, tmp_path: Path):
        path = tmp_path / "data" / "orders.json"

        with json_file_lock(path):
            assert (tmp_path / "data" / "orders.json.lock").exists()

    def test_timeout(self, tmp_path: Path):
        """락 획득 실패 → ORDERS_LOCK_TIMEOUT."""
        path = tmp_path / "orders.json"

        with patch("src.core.jsonfile.FileLock") as mock_lock:
            mock_lock.return_value.acquire.side_effect = Timeout(str(path))
            with pytest.raises(CatalogError) as exc_info:
                with json_file_lock(path, timeout=0.01):
                    pass

        assert exc_info.value.code == ErrorCodes.ORDERS_LOCK_TIMEOUT
        mock_lock.return_value.release.assert_not_called()


class TestLoadJson:
    """load_json 함수 테스트."""

    def test_missing_returns_default(self, tmp_path: Path):
        assert load_json(tmp_path / "nope.json", default=[]) == []

    def test_corrupt(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("[1, 2", encoding="utf-8")

        with pytest.raises(CatalogError) as exc_info:
            load_json(path)

        assert exc_info.value.code == ErrorCodes.ORDERS_FILE_CORRUPT


class TestAtomicWriteJson:
    """atomic_write_json 함수 테스트."""

    def test_write_and_read(self, tmp_path: Path):
        path = tmp_path / "nested" / "orders.json"

        atomic_write_json(path, [{"customerName": "홍길동"}])

        assert json.loads(path.read_text(encoding="utf-8")) == [{"customerName": "홍길동"}]
        assert "홍길동" in path.read_text(encoding="utf-8")

    def test_no_temp_files_left(self, tmp_path: Path):
        path = tmp_path / "orders.json"

        atomic_write_json(path, [])
        atomic_write_json(path, [1])

        assert [p.name for p in tmp_path.iterdir()] == ["orders.json"]

    def test_failure_keeps_existing_file(self, tmp_path: Path):
        """직렬화 실패 → 기존 파일 유지, temp 파일 정리."""
        path = tmp_path / "orders.json"
        atomic_write_json(path, [1])

        with pytest.raises(TypeError):
            atomic_write_json(path, [object()])

        assert json.loads(path.read_text(encoding="utf-8")) == [1]
        assert [p.name for p in tmp_path.iterdir()] == ["orders.json"]
