# pacecms/models.py
"""
목록 화면에서 쓰는 Row 뷰모델과 공개 상태 라벨 변환.

저장소에는 `is_public` 불리언만 저장하고, "공개중"/"비공개" 라벨은
API 응답과 요청을 주고받는 경계에서만 변환한다.
"""

from dataclasses import dataclass, field, asdict

from pacecms.config import STATUS_LABELS

PUBLIC_VALUES = {'public', 'true', '1', STATUS_LABELS[True], '공개'}
PRIVATE_VALUES = {'private', 'false', '0', STATUS_LABELS[False]}


def status_label(is_public):
    """불리언 -> 표시 라벨"""
    return STATUS_LABELS[bool(is_public)]


def parse_status(value):
    """표시 라벨/문자열/불리언 -> 불리언"""
    if isinstance(value, bool):
        return value
    if value is None:
        raise ValueError("공개 여부가 필요합니다.")
    normalized = str(value).strip()
    if normalized.lower() in PUBLIC_VALUES or normalized in PUBLIC_VALUES:
        return True
    if normalized.lower() in PRIVATE_VALUES or normalized in PRIVATE_VALUES:
        return False
    raise ValueError(f"알 수 없는 공개 상태: {value}")


@dataclass
class Row:
    id: str
    title: str = ''
    description: str = ''
    price: object = 0
    thumbnail: str = ''
    category: str = ''
    likes: int = 0
    purchases: int = 0
    is_public: bool = False
    order_index: int = 0
    extra: dict = field(default_factory=dict)
    selected: bool = False

    @property
    def status(self):
        return status_label(self.is_public)

    def to_dict(self):
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'price': self.price,
            'thumbnail': self.thumbnail,
            'category': self.category,
            'likes': self.likes,
            'purchases': self.purchases,
            'isPublic': self.is_public,
            'status': self.status,
            'orderIndex': self.order_index,
            'selected': False
        }
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data):
        """API 응답 dict -> Row (선택 상태는 항상 해제)"""
        known = {
            'id', 'title', 'description', 'price', 'thumbnail', 'category',
            'likes', 'purchases', 'isPublic', 'status', 'orderIndex', 'selected'
        }
        if 'isPublic' in data:
            is_public = bool(data['isPublic'])
        else:
            is_public = parse_status(data.get('status', False))
        return cls(
            id=data['id'],
            title=data.get('title', ''),
            description=data.get('description', ''),
            price=data.get('price', 0),
            thumbnail=data.get('thumbnail', ''),
            category=data.get('category', ''),
            likes=data.get('likes', 0),
            purchases=data.get('purchases', 0),
            is_public=is_public,
            order_index=data.get('orderIndex', 0),
            extra={k: v for k, v in data.items() if k not in known}
        )

    def copy(self):
        return Row(**{**asdict(self), 'extra': dict(self.extra)})
