"""
test_files_cli.py - files_cli.py 스크립트 테스트

테스트 케이스:
- TC1: 인자 파싱
- TC2: ls (폴더 / 이미지 / 빈 폴더 / 에러)
- TC3: mkdir (성공 / 빈 이름 / 중복)
- TC4: upload (성공 / 파일 없음)
- TC5: rm (폴더 / 이미지 / 확인 거절 / 없음)
"""

import sys
from pathlib import Path

import pytest

# scripts 모듈 임포트를 위한 경로 추가
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent / "scripts"))

from files_cli import build_parser, make_confirm, run  # noqa: E402

from src.browser.backend import LocalFilesBackend  # noqa: E402


@pytest.fixture
def backend(file_store) -> LocalFilesBackend:
    return LocalFilesBackend(file_store)


def _args(*argv: str):
    return build_parser().parse_args(list(argv))


# =============================================================================
# TC1: 인자 파싱
# =============================================================================


class TestParser:
    def test_ls_defaults(self):
        args = _args("ls")

        assert args.command == "ls"
        assert args.dir == ""
        assert args.search == ""
        assert args.server == "http://127.0.0.1:8000"

    def test_rm_yes(self):
        args = _args("--server", "http://x", "rm", "shoes", "boots", "--yes")

        assert args.server == "http://x"
        assert (args.dir, args.name, args.yes) == ("shoes", "boots", True)

    def test_command_required(self):
        with pytest.raises(SystemExit):
            _args()


# =============================================================================
# TC2: ls
# =============================================================================


class TestLs:
    @pytest.mark.asyncio
    async def test_root_folders(self, backend, capsys):
        code = await run(_args("ls"), backend)

        out = capsys.readouterr().out
        assert code == 0
        assert "bags" in out and "shoes" in out
        assert "폴더 2개" in out

    @pytest.mark.asyncio
    async def test_search(self, backend, capsys):
        code = await run(_args("ls", "--search", "SHO"), backend)

        out = capsys.readouterr().out
        assert code == 0
        assert "shoes" in out
        assert "bags" not in out

    @pytest.mark.asyncio
    async def test_images(self, backend, capsys):
        await run(_args("ls", "bags"), backend)

        out = capsys.readouterr().out
        assert "B1.png" in out
        assert "/catalogointerativo/files/bags/B1.png" in out

    @pytest.mark.asyncio
    async def test_empty(self, backend, capsys):
        await run(_args("ls", "shoes/boots"), backend)

        assert "빈 폴더" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_missing_directory(self, backend):
        assert await run(_args("ls", "nope"), backend) == 1


# =============================================================================
# TC3: mkdir
# =============================================================================


class TestMkdir:
    @pytest.mark.asyncio
    async def test_create(self, backend, storage_root: Path, capsys):
        code = await run(_args("mkdir", "shoes", "Summer"), backend)

        assert code == 0
        assert (storage_root / "shoes" / "Summer").is_dir()
        assert "폴더가 생성되었습니다" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_blank_name(self, backend, storage_root: Path):
        code = await run(_args("mkdir", "", "   "), backend)

        assert code == 1

    @pytest.mark.asyncio
    async def test_duplicate(self, backend, capsys):
        code = await run(_args("mkdir", "", "shoes"), backend)

        assert code == 1
        assert "already exists" in capsys.readouterr().out


# =============================================================================
# TC4: upload
# =============================================================================


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload(self, backend, storage_root: Path, tmp_path: Path):
        source = tmp_path / "C1.jpg"
        source.write_bytes(b"jpg")

        code = await run(_args("upload", "shoes/boots", str(source)), backend)

        assert code == 0
        assert (storage_root / "shoes" / "boots" / "C1.jpg").read_bytes() == b"jpg"

    @pytest.mark.asyncio
    async def test_missing_local_file(self, backend, tmp_path: Path):
        code = await run(_args("upload", "bags", str(tmp_path / "nope.jpg")), backend)

        assert code == 1


# =============================================================================
# TC5: rm
# =============================================================================


class TestRm:
    @pytest.mark.asyncio
    async def test_remove_folder(self, backend, storage_root: Path):
        code = await run(_args("rm", "shoes", "sandals", "--yes"), backend)

        assert code == 0
        assert not (storage_root / "shoes" / "sandals").exists()

    @pytest.mark.asyncio
    async def test_remove_image(self, backend, storage_root: Path):
        code = await run(_args("rm", "bags", "B1.png", "--yes"), backend)

        assert code == 0
        assert not (storage_root / "bags" / "B1.png").exists()

    @pytest.mark.asyncio
    async def test_declined(self, backend, storage_root: Path, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        code = await run(_args("rm", "", "shoes"), backend)

        assert code == 1
        assert (storage_root / "shoes").exists()

    @pytest.mark.asyncio
    async def test_unknown_name(self, backend):
        assert await run(_args("rm", "bags", "nope.jpg", "--yes"), backend) == 1


class TestMakeConfirm:
    def test_assume_yes(self):
        assert make_confirm(True)("삭제?") is True

    def test_prompt(self, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: " Y ")

        assert make_confirm(False)("삭제?") is True
