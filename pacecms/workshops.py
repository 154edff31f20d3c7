# pacecms/workshops.py

from pacecms.config import ALLOWED_IMAGE_EXTENSIONS, WORKSHOP_CATEGORIES, WORKSHOP_STATUSES
from pacecms.models import parse_status
from pacecms.resources import Field, Resource, Upload
from pacecms.utils import format_dot_date, parse_date, parse_price

HIDDEN = 'HIDDEN'
DEFAULT_STATUS = 'RECRUITING'


def parse_workshop_status(value):
    status = str(value).strip().upper()
    if status not in WORKSHOP_STATUSES:
        raise ValueError(f"알 수 없는 워크숍 상태: {value}")
    return status


def parse_workshop_category(value):
    category = str(value).strip().upper()
    if category not in WORKSHOP_CATEGORIES:
        raise ValueError(f"알 수 없는 카테고리: {value}")
    return category


def parse_iso_date(value):
    return parse_date(value).isoformat()


class WorkshopResource(Resource):
    slug = 'workshops'
    label = '워크숍'
    item_type = 'WORKSHOP'
    fields = [
        Field('title', required=True, message='워크숍 제목을 입력해주세요.'),
        Field('description', default=''),
        Field('price', parser=parse_price, default=0),
        Field('category', parser=parse_workshop_category, default=''),
        Field('status', parser=parse_workshop_status, default=DEFAULT_STATUS),
        Field('startDate', 'start_date', parser=parse_iso_date, required=True, message='시작일을 선택해주세요.'),
        Field('endDate', 'end_date', parser=parse_iso_date, required=True, message='종료일을 선택해주세요.'),
        Field('locationOrUrl', 'location_or_url', default=''),
    ]
    uploads = [
        Upload('thumbnail', 'thumbnail', 'thumbnail_key', 'workshops',
               ALLOWED_IMAGE_EXTENSIONS, url_name='thumbnailUrl'),
    ]

    def prepare(self, payload, existing):
        # 목록 화면의 공개 여부 토글은 HIDDEN 상태로 변환
        if 'isPublic' in payload and 'status' not in payload:
            is_public = parse_status(payload.pop('isPublic'))
            payload.update(self.status_update(is_public, existing or {}))
        return payload

    def validate(self, data, errors):
        start, end = data.get('start_date'), data.get('end_date')
        if start and end and end < start:
            errors['endDate'] = '종료일은 시작일보다 뒤여야 합니다.'

    def status_update(self, is_public, existing):
        current = (existing or {}).get('status', DEFAULT_STATUS)
        if not is_public:
            return {'status': HIDDEN}
        return {'status': DEFAULT_STATUS if current == HIDDEN else current}

    def is_public(self, doc):
        return doc.get('status', DEFAULT_STATUS) != HIDDEN

    def row_extra(self, doc):
        return {
            'workshopStatus': doc.get('status', DEFAULT_STATUS),
            'startDate': format_dot_date(doc.get('start_date')),
            'endDate': format_dot_date(doc.get('end_date')),
            'locationOrUrl': doc.get('location_or_url') or None
        }
