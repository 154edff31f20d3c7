# pacecms/resources.py
"""
관리자 목록 화면에서 다루는 리소스(강의, 전자책, 워크숍, 메인 비주얼) 공통 정의.

각 리소스는 폼 필드 목록(Field)과 업로드 필드 목록(Upload)으로 요청 값을
저장 문서로 바꾸고, 저장 문서를 목록 Row / 상세 dict로 바꾼다.
"""

import logging

from pacecms.models import Row, parse_status, status_label
from pacecms.uploads import has_file, is_allowed_file, store_upload
from pacecms.utils import ValidationError

logger = logging.getLogger(__name__)


def _is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False


def text(value):
    return str(value).strip()


class Field:
    def __init__(self, name, store=None, parser=text, required=False, message=None,
                 default=None, aliases=()):
        self.name = name
        self.store = store or name
        self.parser = parser
        self.required = required
        self.message = message or f"{name} 값을 입력해주세요."
        self.default = default
        self.aliases = aliases

    def raw_value(self, payload):
        for key in (self.name,) + tuple(self.aliases):
            if key in payload:
                return True, payload[key]
        return False, None


class Upload:
    def __init__(self, name, store, key_store, prefix, allowed, url_name=None,
                 required=False, message=None):
        self.name = name
        self.store = store
        self.key_store = key_store
        self.prefix = prefix
        self.allowed = allowed
        self.url_name = url_name or store
        self.required = required
        self.message = message or f"{name} 파일을 등록해주세요."


class Resource:
    slug = None
    label = None
    item_type = None
    completed_purchases_only = False
    fields = []
    uploads = []

    def __init__(self, collection):
        self.collection = collection

    # 요청 -> 저장 문서

    def prepare(self, payload, existing):
        """파싱 전에 요청 값을 정리 (리소스별 재정의)"""
        return payload

    def validate(self, data, errors):
        """필드 간 검증 (리소스별 재정의)"""

    def parse(self, payload, files=None, existing=None):
        """요청 값 검증 후 저장할 필드 dict 반환

        existing이 주어지면 요청에 없는 필드는 저장된 값을 그대로 쓴다.
        """
        files = files or {}
        payload = self.prepare(dict(payload), existing)
        data = {}
        errors = {}

        for field in self.fields:
            present, raw = field.raw_value(payload)
            if not present and existing is not None:
                data[field.store] = existing.get(field.store, field.default)
                continue
            if _is_blank(raw):
                if field.required:
                    errors[field.name] = field.message
                else:
                    data[field.store] = field.default
                continue
            try:
                data[field.store] = field.parser(raw)
            except (TypeError, ValueError) as e:
                errors[field.name] = str(e) or field.message

        pending_uploads = []
        for upload in self.uploads:
            file = files.get(upload.name)
            if has_file(file):
                if not is_allowed_file(file.filename, upload.allowed):
                    errors[upload.name] = f"지원하지 않는 파일 형식입니다: {file.filename}"
                else:
                    pending_uploads.append((upload, file))
            elif not _is_blank(payload.get(upload.url_name)):
                data[upload.store] = text(payload[upload.url_name])
            elif existing is not None and existing.get(upload.store):
                continue
            elif upload.required:
                errors[upload.name] = upload.message

        self.validate(data, errors)
        if errors:
            raise ValidationError(errors)

        for upload, file in pending_uploads:
            stored = store_upload(file, upload.prefix, upload.allowed)
            data[upload.store] = stored['url']
            data[upload.key_store] = stored['key']
        return data

    def status_update(self, is_public, existing):
        """공개 여부 변경 시 저장할 필드"""
        return {'is_public': is_public}

    def is_public(self, doc):
        return bool(doc.get('is_public', False))

    # 저장 문서 -> 응답

    def row_extra(self, doc):
        return {}

    def to_row(self, doc, favorites, purchases):
        return Row(
            id=doc['id'],
            title=doc.get('title', ''),
            description=doc.get('description', '') or '',
            price=doc.get('price') or 0,
            thumbnail=doc.get('thumbnail', '') or '',
            category=doc.get('category', '') or '',
            likes=favorites.get(doc['id'], 0),
            purchases=purchases.get(doc['id'], 0),
            is_public=self.is_public(doc),
            order_index=doc.get('order_index', 0),
            extra=self.row_extra(doc)
        )

    def to_detail(self, doc):
        detail = {'id': doc['id']}
        for field in self.fields:
            if field.store == 'is_public':
                continue
            detail[field.name] = doc.get(field.store, field.default)
        for upload in self.uploads:
            detail[upload.url_name] = doc.get(upload.store, '')
        detail.setdefault('status', status_label(self.is_public(doc)))
        detail.update({
            'isPublic': self.is_public(doc),
            'orderIndex': doc.get('order_index', 0),
            'createdAt': doc.get('created_at', ''),
            'updatedAt': doc.get('updated_at', '')
        })
        return detail


def status_field(required=True):
    """공개 여부 필드 (라벨/문자열/불리언 -> is_public)"""
    return Field('status', 'is_public', parser=parse_status, required=required,
                 message='공개 여부를 선택해주세요.', default=False, aliases=('isPublic',))
