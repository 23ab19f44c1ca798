"""
Session Gate: 단일 공유 비밀번호로 관리 화면 진입 제어.

⚠️ 보안 경계 아님:
- 환경 변수의 평문 비밀번호 비교, 해시/잠금/속도 제한 없음
- 사용자 구분 없음
- 실제 운영에서는 외부 인증 제공자에 위임할 것

세션 상태는 프로세스 메모리에만 존재하며, 페이지 전체 새로고침 시
토큰이 사라지므로 다시 로그인해야 한다.
"""

import logging
import secrets
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

# 메모리에 유지할 최대 세션 수 (초과 시 오래된 것부터 제거)
MAX_SESSIONS = 256


@dataclass
class SessionState:
    """한 페이지(탭)의 세션 상태."""
    token: str
    authenticated: bool = False
    created_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())


class SessionGate:
    """비밀번호 비교 후 SessionState.authenticated를 켠다."""

    def __init__(self, secret: str):
        self._secret = secret

    def check(self, password: str) -> bool:
        return password == self._secret

    def login(self, state: SessionState, password: str) -> bool:
        """
        로그인 시도.

        Returns:
            성공 여부 (실패해도 상태는 바뀌지 않음)
        """
        if not self.check(password):
            logger.warning("Admin login rejected: wrong password")
            return False
        state.authenticated = True
        return True


class SessionRegistry:
    """
    토큰 → SessionState (in-memory).

    디스크에 저장하지 않는다. 서버 재시작 시 전부 사라진다.
    """

    def __init__(self, max_sessions: int = MAX_SESSIONS):
        self._sessions: OrderedDict[str, SessionState] = OrderedDict()
        self._max_sessions = max_sessions

    def create(self) -> SessionState:
        state = SessionState(token=secrets.token_urlsafe(24))
        self._sessions[state.token] = state
        while len(self._sessions) > self._max_sessions:
            self._sessions.popitem(last=False)
        return state

    def get(self, token: str | None) -> SessionState | None:
        if not token:
            return None
        return self._sessions.get(token)

    def discard(self, token: str) -> None:
        self._sessions.pop(token, None)

    def __len__(self) -> int:
        return len(self._sessions)
