# pacecms/list_screen.py
"""
관리자 목록 화면 컨트롤러.

서버에서 받아온 Row 목록을 들고 선택, 드래그 순서 변경, 공개 여부 변경,
일괄 저장/삭제를 처리한다. 변경은 먼저 로컬에 반영하고(낙관적 갱신),
저장에 성공하면 다시 조회해서 서버 상태와 맞춘다. 저장에 실패하면 마지막으로
서버에서 받은 상태로 되돌린다.
"""

import logging

from pacecms.api_client import ApiError
from pacecms.confirm import ConfirmationGate
from pacecms.models import Row
from pacecms.notifier import Notifier
from pacecms.ordering import build_reorder_payload, move_item

logger = logging.getLogger(__name__)

ALL_CATEGORIES = 'TOTAL'


class ListScreen:
    def __init__(self, resource, client, guard, notifier=None, gate=None, label='항목'):
        self.resource = resource
        self.client = client
        self.guard = guard
        self.notifier = notifier or Notifier()
        self.gate = gate or ConfirmationGate()
        self.label = label
        self.rows = []
        self.category_filter = ALL_CATEGORIES
        self._baseline = []

    # 조회

    def fetch(self):
        """전체 목록 다시 조회 (선택 상태와 변경 표시 초기화)"""
        try:
            data = self.client.list_rows(self.resource)
        except ApiError as e:
            self.notifier.error(f'데이터를 불러오는데 실패했습니다. ({e.message})')
            return False

        self.rows = [Row.from_dict(item) for item in data]
        self._baseline = [row.copy() for row in self.rows]
        self.guard.disarm()
        return True

    def rollback(self):
        """마지막으로 조회한 상태로 되돌리기"""
        self.rows = [row.copy() for row in self._baseline]
        self.guard.disarm()

    @property
    def row_ids(self):
        return [row.id for row in self.rows]

    def _find(self, row_id):
        for row in self.rows:
            if row.id == row_id:
                return row
        return None

    # 선택

    def toggle_row(self, row_id, checked):
        row = self._find(row_id)
        if row:
            row.selected = bool(checked)

    @property
    def all_selected(self):
        return bool(self.rows) and all(row.selected for row in self.rows)

    def toggle_all(self):
        checked = not self.all_selected
        for row in self.rows:
            row.selected = checked

    @property
    def selected_ids(self):
        return [row.id for row in self.rows if row.selected]

    def set_category_filter(self, category):
        self.category_filter = category or ALL_CATEGORIES

    def visible_rows(self):
        if self.category_filter == ALL_CATEGORIES:
            return list(self.rows)
        return [row for row in self.rows if row.category == self.category_filter]

    # 편집

    def move(self, moved_id, target_id):
        """드래그 앤 드롭: moved_id를 target_id 자리로, 순서가 바뀌면 True"""
        moved = move_item(self.rows, moved_id, target_id)
        if [row.id for row in moved] == self.row_ids:
            return False
        self.rows = moved
        self.guard.arm()
        return True

    def set_status(self, row_id, is_public):
        row = self._find(row_id)
        if row is None or row.is_public == bool(is_public):
            return False
        row.is_public = bool(is_public)
        self.guard.arm()
        return True

    # 저장

    def save_order(self):
        """현재 순서를 모든 행의 orderIndex로 저장"""
        payload = build_reorder_payload(self.rows)
        try:
            self.client.reorder(self.resource, payload)
        except ApiError as e:
            logger.error(f"순서 저장 실패: {e}")
            self.rollback()
            self.notifier.error('순서 저장 실패')
            return False

        self.notifier.success('순서가 저장되었습니다.')
        self.guard.disarm()
        self.fetch()
        return True

    def save(self):
        """선택한 행의 공개 여부 일괄 저장"""
        selected = [row for row in self.rows if row.selected]
        if not selected:
            self.notifier.info('저장할 항목을 선택해주세요.')
            return False

        updates = [{'id': row.id, 'isPublic': row.is_public} for row in selected]
        try:
            self.client.bulk_update(self.resource, updates)
        except ApiError as e:
            logger.error(f"일괄 저장 실패: {e}")
            self.rollback()
            self.notifier.error(f'저장 실패: {e.message}')
            return False

        self.notifier.success('저장되었습니다.')
        self.guard.disarm()
        self.fetch()
        return True

    # 삭제

    def request_delete(self, row_id=None):
        """삭제 확인 모달 열기 (row_id가 없으면 선택한 행 전체)"""
        target_ids = [row_id] if row_id else self.selected_ids
        if not target_ids:
            self.notifier.info('삭제할 항목을 선택해주세요.')
            return False

        if row_id:
            description = f'선택한 {self.label}을(를) 정말 삭제하시겠습니까?'
        else:
            description = f'선택한 {len(target_ids)}개의 {self.label}을(를) 정말 삭제하시겠습니까?'

        self.gate.open(
            f'{self.label} 삭제',
            description,
            on_confirm=lambda: self._execute_delete(target_ids),
            confirm_text='삭제',
            cancel_text='취소'
        )
        return True

    def _execute_delete(self, target_ids):
        try:
            self.client.bulk_delete(self.resource, target_ids)
        except ApiError as e:
            self.notifier.error(f'삭제 실패: {e.message}')
            return False

        self.notifier.success(f'{len(target_ids)}개의 {self.label}이(가) 삭제되었습니다.')
        self.fetch()
        return True

    def navigate(self, href):
        return self.guard.attempt_navigation(href)
