# pacecms/config.py

import os

# 환경변수 설정
ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', '')
ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'changeme')
JWT_SECRET = os.environ.get('JWT_SECRET', 'supersecretjwt')
JWT_ALGORITHM = 'HS256'
JWT_EXPIRES_HOURS = 4

AWS_ACCESS_KEY = os.environ.get('AWS_ACCESS_KEY', '')
AWS_SECRET_KEY = os.environ.get('AWS_SECRET_KEY', '')
REGION_NAME = os.environ.get('REGION_NAME', 'ap-northeast-2')
BUCKET_NAME = os.environ.get('BUCKET_NAME', 'pace-assets')
S3_ENDPOINT_URL = os.environ.get('S3_ENDPOINT_URL', f'https://s3.{REGION_NAME}.wasabisys.com')
SECRET_KEY = os.environ.get('FLASK_SECRET_KEY', 'supersecret')

# 시드 데이터 삭제는 에뮬레이터에서만 허용
FIRESTORE_EMULATOR_HOST = os.environ.get('FIRESTORE_EMULATOR_HOST', '')


def firebase_credentials():
    """Firebase 서비스 계정 정보 (환경변수가 없으면 None)"""
    if 'project_id' not in os.environ or 'private_key' not in os.environ:
        return None
    return {
        "type": os.environ.get("type", "service_account"),
        "project_id": os.environ["project_id"],
        "private_key_id": os.environ.get("private_key_id", ""),
        "private_key": os.environ["private_key"].replace('\\n', '\n'),
        "client_email": os.environ.get("client_email", ""),
        "client_id": os.environ.get("client_id", ""),
        "auth_uri": os.environ.get("auth_uri", "https://accounts.google.com/o/oauth2/auth"),
        "token_uri": os.environ.get("token_uri", "https://oauth2.googleapis.com/token"),
        "auth_provider_x509_cert_url": os.environ.get("auth_provider_x509_cert_url", "https://www.googleapis.com/oauth2/v1/certs"),
        "client_x509_cert_url": os.environ.get("client_x509_cert_url", "")
    }


# Firestore 컬렉션
COLLECTIONS = {
    'courses': 'courses',
    'ebooks': 'documents',
    'workshops': 'workshops',
    'main-visual': 'main_visuals',
}
FAVORITES_COLLECTION = 'favorites'
ORDER_ITEMS_COLLECTION = 'order_items'
REVIEWS_COLLECTION = 'reviews'
INSTRUCTORS_COLLECTION = 'instructors'

# 공개 상태 표시 라벨
STATUS_LABELS = {
    True: '공개중',
    False: '비공개'
}

# 카테고리
COURSE_CATEGORIES = ['INTERVIEW', 'RESUME', 'NETWORKING']
DEFAULT_COURSE_CATEGORY = 'NETWORKING'

DOCUMENT_CATEGORIES = {
    'MARKETING': '마케팅',
    'IT': 'IT/개발',
    'DESIGN': '디자인',
    'PUBLIC': '공공',
    'ACCOUNTING': '회계',
    'SERVICE': '서비스',
    'INTERVIEW': '인터뷰',
    'RESUME': '이력서',
    'NETWORKING': '네트워킹'
}

WORKSHOP_STATUSES = ['RECRUITING', 'CLOSED', 'ONGOING', 'COMPLETED', 'HIDDEN']
WORKSHOP_CATEGORIES = ['INTERVIEW', 'RESUME', 'NETWORKING', 'CAREER']

# 추천 대상 (폼 라벨 -> 저장값)
TARGET_AUDIENCE_LABELS = {
    'IT 개발': 'IT',
    '공무원': 'GOVERNMENT',
    '재무회계': 'FINANCE',
    '디자인': 'DESIGN',
    '북미 취업이력서': 'RESUME',
    '인터뷰 준비': 'INTERVIEW',
    '네트워킹': 'NETWORKING',
    '서비스': 'SERVICE'
}

# 업로드 설정
MAX_CONTENT_LENGTH = 500 * 1024 * 1024  # 500MB
ALLOWED_VIDEO_EXTENSIONS = {'.mp4', '.avi', '.mov', '.wmv', '.flv', '.mkv', '.webm', '.m4v', '.mpg', '.mpeg'}
ALLOWED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.webp'}
ALLOWED_DOCUMENT_EXTENSIONS = {'.pdf'}

# Presigned URL (S3 서명 URL 최대 7일)
PRESIGNED_URL_EXPIRES = 604800
URL_REFRESH_HOURS = 3
URL_SAFETY_MARGIN_MINUTES = 120
