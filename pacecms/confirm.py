# pacecms/confirm.py


class ConfirmationGate:
    """확인 모달

    열기만 해서는 아무 동작도 하지 않는다. confirm()을 호출해야 콜백이
    한 번 실행된다. 취소와 바깥 클릭(dismiss)은 같다.
    """

    def __init__(self):
        self.is_open = False
        self.title = ''
        self.description = ''
        self.confirm_text = '확인'
        self.cancel_text = '취소'
        self._on_confirm = None

    def open(self, title, description, on_confirm, confirm_text='확인', cancel_text='취소'):
        self.is_open = True
        self.title = title
        self.description = description
        self.confirm_text = confirm_text
        self.cancel_text = cancel_text
        self._on_confirm = on_confirm

    def _close(self):
        self.is_open = False
        self._on_confirm = None

    def confirm(self):
        """콜백 실행 후 닫기 (닫혀 있으면 무시)"""
        if not self.is_open:
            return None
        callback = self._on_confirm
        self._close()
        return callback() if callback else None

    def cancel(self):
        self._close()

    dismiss = cancel
