# pacecms/notifier.py
import logging

logger = logging.getLogger(__name__)


class Notifier:
    """토스트 알림 모음 (화면에 띄울 메시지를 순서대로 보관)"""

    LEVELS = {
        'success': logging.INFO,
        'info': logging.INFO,
        'error': logging.ERROR,
    }

    def __init__(self):
        self.messages = []

    def notify(self, level, message):
        self.messages.append((level, message))
        logger.log(self.LEVELS.get(level, logging.INFO), message)

    def success(self, message):
        self.notify('success', message)

    def info(self, message):
        self.notify('info', message)

    def error(self, message):
        self.notify('error', message)

    @property
    def last(self):
        return self.messages[-1] if self.messages else None
