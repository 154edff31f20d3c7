# pacecms/main_visual.py

from datetime import datetime, time

from pacecms.config import ALLOWED_IMAGE_EXTENSIONS
from pacecms.resources import Field, Resource, Upload, status_field
from pacecms.utils import format_dot_date, parse_date, parse_time


def parse_iso_date(value):
    return parse_date(value).isoformat()


def _boundary(date_value, time_value, end=False):
    if not date_value:
        return None
    day = parse_date(date_value)
    if time_value:
        hour, minute = (int(part) for part in time_value.split(':'))
        moment = time(hour, minute, 59, 999999) if end else time(hour, minute)
    else:
        moment = time.max if end else time.min
    return datetime.combine(day, moment)


def schedule_window(doc):
    """게시 기간 (시작, 종료) datetime, 없는 쪽은 None"""
    start = _boundary(doc.get('start_date'), doc.get('start_time'))
    end = _boundary(doc.get('end_date'), doc.get('end_time'), end=True)
    return start, end


def is_visible(doc, now=None):
    """공개 상태이고 게시 기간 안에 있는지"""
    if not doc.get('is_public'):
        return False
    now = now or datetime.now()
    start, end = schedule_window(doc)
    if start and now < start:
        return False
    if end and now > end:
        return False
    return True


class MainVisualResource(Resource):
    slug = 'main-visual'
    label = '메인 비주얼'
    item_type = 'MAIN_VISUAL'
    fields = [
        Field('title', required=True, message='비주얼 제목을 입력해주세요.'),
        Field('description', required=True, message='설명 문구를 입력해주세요.'),
        status_field(required=True),
        Field('startDate', 'start_date', parser=parse_iso_date, default=None),
        Field('endDate', 'end_date', parser=parse_iso_date, default=None),
        Field('startTime', 'start_time', parser=parse_time, default=''),
        Field('endTime', 'end_time', parser=parse_time, default=''),
        Field('link', required=True, message='링크 또는 이름을 등록해주세요.'),
        Field('linkName', 'link_name', required=True, message='링크 또는 이름을 등록해주세요.'),
    ]
    uploads = [
        Upload('image', 'thumbnail', 'thumbnail_key', 'main-visual',
               ALLOWED_IMAGE_EXTENSIONS, url_name='imageUrl'),
    ]

    def validate(self, data, errors):
        start_date, end_date = data.get('start_date'), data.get('end_date')
        if start_date and end_date:
            if start_date > end_date:
                errors['period'] = '시작일은 종료일보다 앞서야 합니다.'
            elif start_date == end_date:
                start_time, end_time = data.get('start_time'), data.get('end_time')
                if start_time and end_time and start_time > end_time:
                    errors['period'] = '시작시간은 종료시간보다 앞서야 합니다.'

    def row_extra(self, doc):
        if doc.get('start_date') and doc.get('end_date'):
            period = f"{format_dot_date(doc['start_date'])}~{format_dot_date(doc['end_date'])}"
        else:
            period = '-'
        return {
            'period': period,
            'link': doc.get('link') or None,
            'linkName': doc.get('link_name') or None
        }


def to_slide(doc):
    """메인 페이지 슬라이드"""
    return {
        'id': doc['id'],
        'title': doc.get('title') or '',
        'subtitle': doc.get('description') or '',
        'buttonText': doc.get('link_name') or 'Explore programs',
        'route': doc.get('link') or '/courses',
        'image': doc.get('thumbnail') or ''
    }
