"""
경로 규칙: Current Directory 정규화 + 저장소 경로 순회 방지.

규칙:
- Current Directory: "/" 구분, "" = 루트
- 백엔드 호출 전 선행 "files/" 제거
- 저장소 밖을 가리키는 경로 거부 (symlink 포함)
"""

from pathlib import Path

from src.domain.constants import (
    FILES_PREFIX,
    FORBIDDEN_NAME_CHARS,
    NAME_MAX_BYTES,
    NAME_MAX_LENGTH,
    PATH_SEPARATOR,
    RESERVED_NAMES,
)
from src.domain.errors import ErrorCodes, ValidationError

# =============================================================================
# Current Directory
# =============================================================================


def clean_dir(path: str) -> str:
    """
    선행 "files/" 세그먼트 제거.

    예: "files/shoes" → "shoes", "shoes" → "shoes"
    """
    if path.startswith(FILES_PREFIX):
        return path[len(FILES_PREFIX):]
    return path


def split_segments(path: str) -> list[str]:
    """빈 세그먼트를 제외한 경로 조각."""
    return [part for part in path.split(PATH_SEPARATOR) if part]


def normalize_dir(path: str | None) -> str:
    """
    Current Directory 정규화.

    - None → 루트
    - "files/" 제거
    - 빈 세그먼트 제거 ("a//b/" → "a/b")
    """
    if not path:
        return ""
    return PATH_SEPARATOR.join(split_segments(clean_dir(path)))


def parent_dir(path: str) -> str:
    """마지막 세그먼트를 제거한 상위 경로. 루트의 상위는 루트."""
    parts = split_segments(path)
    return PATH_SEPARATOR.join(parts[:-1])


def join_dir(path: str, name: str) -> str:
    """하위 경로. 루트면 name 그대로."""
    return f"{path}{PATH_SEPARATOR}{name}" if path else name


# =============================================================================
# Storage Path Guard
# =============================================================================


def validate_entry_name(name: str) -> str:
    """
    폴더/파일 이름 검증.

    규칙:
    - 앞뒤 공백 제거 후 비어 있으면 안 됨
    - 금지 문자: / \\ : * ? " < > |
    - "." / ".." 금지, 숨김 이름(선행 ".") 금지
    - 최대 120자, UTF-8 255바이트

    Returns:
        정리된 이름

    Raises:
        ValidationError: INVALID_NAME
    """
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError(ErrorCodes.INVALID_NAME, "Name cannot be empty")

    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValidationError(
            ErrorCodes.INVALID_NAME,
            f"Name exceeds {NAME_MAX_LENGTH} characters",
            length=len(cleaned),
        )

    size = len(cleaned.encode("utf-8"))
    if size > NAME_MAX_BYTES:
        raise ValidationError(
            ErrorCodes.INVALID_NAME,
            f"Name exceeds {NAME_MAX_BYTES} bytes",
            size=size,
        )

    found_forbidden = set(cleaned) & FORBIDDEN_NAME_CHARS
    if found_forbidden:
        raise ValidationError(
            ErrorCodes.INVALID_NAME,
            f"Name contains forbidden characters: {''.join(sorted(found_forbidden))}",
            name=cleaned,
        )

    if cleaned in RESERVED_NAMES or cleaned.startswith("."):
        raise ValidationError(
            ErrorCodes.INVALID_NAME,
            f"Name '{cleaned}' is not allowed",
            name=cleaned,
        )

    return cleaned


def resolve_within(root: Path, *parts: str) -> Path:
    """
    root 아래의 경로를 만들고 root 밖으로 나가지 않는지 확인.

    resolve()는 symlink를 따라가므로, 실제 경로가 root 내부인지 확인한다.
    대상이 아직 없어도 된다 (생성 전 경로).

    Raises:
        ValidationError: INVALID_PATH
    """
    segments: list[str] = []
    for part in parts:
        for segment in split_segments(part):
            if segment in RESERVED_NAMES:
                raise ValidationError(
                    ErrorCodes.INVALID_PATH,
                    "Relative path segments are not allowed",
                    path=part,
                )
            segments.append(segment)

    root_resolved = root.resolve()
    candidate = root_resolved.joinpath(*segments)
    try:
        candidate.resolve().relative_to(root_resolved)
    except ValueError:
        raise ValidationError(
            ErrorCodes.INVALID_PATH,
            "Path escapes the storage root",
            path=PATH_SEPARATOR.join(segments),
        ) from None

    return candidate
