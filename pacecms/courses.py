# pacecms/courses.py

from pacecms.config import (
    ALLOWED_IMAGE_EXTENSIONS, COURSE_CATEGORIES, DEFAULT_COURSE_CATEGORY, INSTRUCTORS_COLLECTION
)
from pacecms.database import get_document
from pacecms.aggregation import review_summary
from pacecms.resources import Field, Resource, Upload, status_field
from pacecms.utils import format_price_label, parse_json_field, parse_price

TARGET_AUDIENCE_MAPPING = {
    'IT': {
        'label': 'IT Development',
        'title': 'IT Development Skills',
        'content': 'Master the core development skills and latest trends required in the tech industry.',
        'icon': 'Code2'
    },
    'GOVERNMENT': {
        'label': 'Public Service',
        'title': 'Public Service Competency',
        'content': 'Comprehensive guidance from exam preparation to practical administrative skills.',
        'icon': 'Users'
    },
    'FINANCE': {
        'label': 'Finance',
        'title': 'Finance & Accounting',
        'content': 'Systematically master complex tax and accounting principles for immediate application.',
        'icon': 'BarChart3'
    },
    'DESIGN': {
        'label': 'Design',
        'title': 'Professional Design Practice',
        'content': 'Learn professional design secrets, from basic theory to creating a winning portfolio.',
        'icon': 'Palette'
    },
    'RESUME': {
        'label': 'Resume',
        'title': 'North American Resume',
        'content': 'Master the techniques for writing professional resumes tailored for the NA market.',
        'icon': 'FileText'
    },
    'INTERVIEW': {
        'label': 'Interview',
        'title': 'Winning Interview Strategies',
        'content': 'Learn high-impact response strategies and techniques to impress any interviewer.',
        'icon': 'MessageSquare'
    },
    'NETWORKING': {
        'label': 'Networking',
        'title': 'Strategic Networking',
        'content': 'Master relationship-building and business communication for career advancement.',
        'icon': 'Share2'
    },
    'SERVICE': {
        'label': 'Service',
        'title': 'Service Planning & Operations',
        'content': 'Build core competencies in service planning and operations with a customer-centric focus.',
        'icon': 'Heart'
    }
}


def parse_course_category(value):
    category = str(value).strip().upper()
    if category not in COURSE_CATEGORIES:
        raise ValueError(f"알 수 없는 카테고리: {value}")
    return category


def parse_audience_types(value):
    types = parse_json_field(value, [])
    if isinstance(types, str):
        types = [types]
    unknown = [t for t in types if t not in TARGET_AUDIENCE_MAPPING]
    if unknown:
        raise ValueError(f"알 수 없는 추천 대상: {', '.join(unknown)}")
    return list(types)


def parse_sections(value):
    sections = parse_json_field(value, [])
    if not isinstance(sections, list):
        raise ValueError("섹션 목록 형식이 올바르지 않습니다.")
    result = []
    for index, section in enumerate(sections):
        if not isinstance(section, dict) or not str(section.get('title', '')).strip():
            raise ValueError(f"{index + 1}번째 섹션 제목을 입력해주세요.")
        result.append({
            'title': str(section['title']).strip(),
            'items': list(section.get('items', [])),
            'order_index': index
        })
    return result


def target_audiences(types):
    """저장된 추천 대상 -> 화면 표시용 메타데이터"""
    audiences = []
    for audience_type in types or []:
        mapping = TARGET_AUDIENCE_MAPPING.get(audience_type, {})
        audiences.append({
            'type': audience_type,
            'title': mapping.get('title', audience_type),
            'content': mapping.get('content', ''),
            'icon': mapping.get('icon'),
            'label': mapping.get('label', audience_type)
        })
    return audiences


class CourseResource(Resource):
    slug = 'courses'
    label = '강의'
    item_type = 'COURSE'
    fields = [
        Field('title', required=True, message='강의 제목을 입력해주세요.'),
        Field('courseTitle', 'course_title', default=''),
        Field('description', default=''),
        Field('price', parser=parse_price, default=0),
        Field('category', parser=parse_course_category, default=DEFAULT_COURSE_CATEGORY),
        status_field(required=False),
        Field('targetAudienceTypes', 'target_audience_types', parser=parse_audience_types, default=[]),
        Field('sections', parser=parse_sections, default=[]),
        Field('instructorId', 'instructor_id', default=''),
    ]
    uploads = [
        Upload('thumbnail', 'thumbnail', 'thumbnail_key', 'courses',
               ALLOWED_IMAGE_EXTENSIONS, url_name='thumbnailUrl'),
    ]

    def row_extra(self, doc):
        return {'priceLabel': format_price_label(doc.get('price'))}

    def to_row(self, doc, favorites, purchases):
        row = super().to_row(doc, favorites, purchases)
        row.category = doc.get('category') or DEFAULT_COURSE_CATEGORY
        return row

    def course_detail(self, doc):
        """강의 상세 (섹션, 추천 대상, 강사, 리뷰 요약 포함)"""
        course = self.to_detail(doc)
        course['sections'] = sorted(doc.get('sections', []), key=lambda s: s.get('order_index', 0))
        course['videos'] = doc.get('videos', [])
        course['targetAudiences'] = target_audiences(doc.get('target_audience_types'))
        instructor = get_document(INSTRUCTORS_COLLECTION, doc['instructor_id']) if doc.get('instructor_id') else None
        return {
            'course': course,
            'instructor': instructor,
            'reviews': review_summary(doc['id'])
        }
