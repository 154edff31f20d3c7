# pacecms/navigation.py
"""
저장되지 않은 변경사항이 있을 때 페이지 이동을 막는 가드.

화면 세션마다 하나씩 만들어 목록 화면에 넘긴다. 라우터는 `push(href)`와
`back()` 두 메서드만 있으면 된다. 뒤로가기는 히스토리에 항목을 끼워 넣는
대신 라우터의 이동 가드 훅(`handle_back`)으로 가로챈다.
"""

from enum import Enum
import logging

from pacecms.confirm import ConfirmationGate

logger = logging.getLogger(__name__)

BACK = object()

LEAVE_TITLE = '페이지 이동'
LEAVE_DESCRIPTION = '저장되지 않은 변경사항이 있습니다.\n정말 이동하시겠습니까?'


class GuardState(Enum):
    CLEAN = 'clean'
    DIRTY = 'dirty'


class NavigationGuard:
    def __init__(self, router, gate=None):
        self.router = router
        self.gate = gate or ConfirmationGate()
        self.state = GuardState.CLEAN
        self.pending_target = None

    @property
    def is_dirty(self):
        return self.state is GuardState.DIRTY

    def arm(self):
        if self.state is GuardState.CLEAN:
            logger.debug("변경사항 발생 - 이동 가드 활성화")
        self.state = GuardState.DIRTY

    def disarm(self):
        self.state = GuardState.CLEAN

    def _intercept(self, target):
        # 확인 모달이 이미 떠 있으면 추가 이동 시도는 무시
        if self.gate.is_open:
            return
        self.pending_target = target
        self.gate.open(
            LEAVE_TITLE,
            LEAVE_DESCRIPTION,
            on_confirm=self._proceed,
            confirm_text='이동',
            cancel_text='취소'
        )

    def attempt_navigation(self, href):
        """앱 내 이동 시도, 바로 이동했으면 True"""
        if not self.is_dirty:
            self.router.push(href)
            return True
        self._intercept(href)
        return False

    def handle_back(self):
        """뒤로가기 이동 가드 훅, 라우터가 계속 진행해도 되면 True"""
        if not self.is_dirty:
            return True
        self._intercept(BACK)
        return False

    def before_unload(self):
        """탭 닫기/새로고침 시 브라우저 기본 경고를 띄울지"""
        return self.is_dirty

    def confirm(self):
        return self.gate.confirm()

    def cancel(self):
        self.gate.cancel()
        self.pending_target = None

    def _proceed(self):
        target = self.pending_target
        self.pending_target = None
        self.disarm()
        if target is BACK:
            self.router.back()
        elif target:
            self.router.push(target)
