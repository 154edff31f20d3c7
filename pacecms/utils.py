# pacecms/utils.py

import json
import re
from datetime import datetime, date
import logging

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


class ValidationError(ValueError):
    """폼 검증 실패 (필드명 -> 오류 메시지)"""

    def __init__(self, fields):
        self.fields = fields
        super().__init__(', '.join(f"{k}: {v}" for k, v in fields.items()))


def read_payload(request):
    """JSON 또는 multipart 폼 데이터를 dict로 변환"""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


def parse_json_field(value, default):
    """폼 필드에 문자열로 들어온 JSON 파싱"""
    if value is None or value == '':
        return default
    if isinstance(value, (list, dict)):
        return value
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        raise ValueError(f"잘못된 JSON 형식: {value!r}")


def parse_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'on', 'yes')


def parse_price(value):
    """가격 문자열 파싱 (비어 있으면 None, 숫자가 아니면 ValueError)"""
    if value is None or str(value).strip() == '':
        return None
    price = float(str(value).replace(',', '').replace('$', ''))
    if price < 0:
        raise ValueError("가격은 0 이상이어야 합니다.")
    return int(price) if price.is_integer() else price


def parse_date(value):
    """YYYY-MM-DD 또는 ISO 날짜 문자열 파싱"""
    if not value:
        return None
    if isinstance(value, date):
        return value if not isinstance(value, datetime) else value.date()
    return datetime.fromisoformat(str(value).replace('Z', '')[:10].replace('.', '-')).date()


def parse_time(value):
    """HH:MM 시간 문자열 확인"""
    if not value:
        return ''
    if not TIME_PATTERN.match(value):
        raise ValueError(f"잘못된 시간 형식: {value}")
    return value


def format_dot_date(value):
    """날짜를 YYYY.MM.DD 형식으로"""
    parsed = parse_date(value)
    return parsed.strftime('%Y.%m.%d') if parsed else ''


def format_price_label(price):
    return f"${price}" if price else 'Free'
