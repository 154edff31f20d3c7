# pacecms/ebooks.py

from pacecms.config import (
    ALLOWED_DOCUMENT_EXTENSIONS, ALLOWED_IMAGE_EXTENSIONS, DOCUMENT_CATEGORIES, TARGET_AUDIENCE_LABELS
)
from pacecms.resources import Field, Resource, Upload, status_field
from pacecms.utils import parse_bool, parse_json_field, parse_price


def parse_document_category(value):
    category = str(value).strip().upper()
    if category not in DOCUMENT_CATEGORIES:
        raise ValueError(f"Invalid category: {value}")
    return category


def parse_recommended(value):
    """추천 대상 라벨("IT 개발" 등) 또는 저장값("IT") 목록 -> 저장값 목록"""
    labels = parse_json_field(value, [])
    if isinstance(labels, str):
        labels = [labels]
    known = set(TARGET_AUDIENCE_LABELS.values())
    result = []
    for label in labels:
        if label in TARGET_AUDIENCE_LABELS:
            result.append(TARGET_AUDIENCE_LABELS[label])
        elif label in known:
            result.append(label)
        else:
            raise ValueError(f"알 수 없는 추천 대상: {label}")
    return result


def parse_table_of_contents(value):
    sections = parse_json_field(value, [])
    if not isinstance(sections, list):
        raise ValueError("목차 형식이 올바르지 않습니다.")
    result = []
    for index, section in enumerate(sections):
        if not isinstance(section, dict):
            raise ValueError(f"{index + 1}번째 목차의 제목과 내용을 입력해주세요.")
        title = str(section.get('title', '')).strip()
        content = str(section.get('content', '')).strip()
        if not title or not content:
            raise ValueError(f"{index + 1}번째 목차의 제목과 내용을 입력해주세요.")
        result.append({'title': title, 'content': content})
    return result


def parse_links(value):
    links = parse_json_field(value, [])
    if not isinstance(links, list):
        raise ValueError("추천 링크 형식이 올바르지 않습니다.")
    result = []
    for index, link in enumerate(links):
        if not isinstance(link, dict):
            raise ValueError(f"{index + 1}번째 링크의 주소와 이름을 입력해주세요.")
        url = str(link.get('url', '')).strip()
        name = str(link.get('name', '')).strip()
        if not url or not name:
            raise ValueError(f"{index + 1}번째 링크의 주소와 이름을 입력해주세요.")
        result.append({'url': url, 'name': name})
    return result


class EbookResource(Resource):
    slug = 'ebooks'
    label = '전자책'
    item_type = 'EBOOK'
    completed_purchases_only = True
    fields = [
        Field('category', parser=parse_document_category, required=True, message='카테고리를 선택해주세요.'),
        status_field(required=True),
        Field('showOnMain', 'is_main', parser=parse_bool, default=False),
        Field('title', required=True, message='제목을 입력해주세요.'),
        Field('intro', 'description', required=True, message='소개를 입력해주세요.'),
        Field('processTitle', 'process_title', default=''),
        Field('processContent', 'process_content', default=''),
        Field('price', parser=parse_price, required=True, message='가격을 입력해주세요.'),
        Field('visualTitle', 'visual_title1', default=''),
        Field('visualTitle2', 'visual_title2', default=''),
        Field('recommended', 'target_audience_types', parser=parse_recommended, default=[]),
        Field('sections', 'table_of_contents', parser=parse_table_of_contents, default=[]),
        Field('links', 'recommended_links', parser=parse_links, default=[]),
    ]
    uploads = [
        Upload('thumbnail', 'thumbnail', 'thumbnail_key', 'ebooks/thumbnails',
               ALLOWED_IMAGE_EXTENSIONS, url_name='thumbnailUrl', required=True,
               message='썸네일 이미지를 등록해주세요.'),
        Upload('file', 'bucket_url', 'file_key', 'ebooks/files',
               ALLOWED_DOCUMENT_EXTENSIONS, url_name='fileUrl', required=True,
               message='전자책 파일을 등록해주세요.'),
    ]

    def row_extra(self, doc):
        return {
            'categoryLabel': DOCUMENT_CATEGORIES.get(doc.get('category'), doc.get('category', '')),
            'showOnMain': bool(doc.get('is_main', False))
        }
