# pacecms/database.py

import logging
from datetime import datetime

import firebase_admin
from firebase_admin import credentials, firestore

from pacecms.config import firebase_credentials

logger = logging.getLogger(__name__)

_db = None


def initialize_firebase():
    """Firebase Admin SDK 초기화"""
    if not firebase_admin._apps:
        creds = firebase_credentials()
        if creds:
            firebase_admin.initialize_app(credentials.Certificate(creds))
        else:
            # 에뮬레이터 또는 기본 자격 증명 사용
            firebase_admin.initialize_app()
        logger.info("✅ Firebase 초기화 완료")
    return firestore.client()


def init_db(client=None):
    """Firestore 클라이언트 지정 (None이면 Firebase에서 생성)"""
    global _db
    _db = client if client is not None else initialize_firebase()
    return _db


def get_db():
    if _db is None:
        init_db()
    return _db


def _snapshot_to_dict(snapshot):
    data = snapshot.to_dict() or {}
    data['id'] = snapshot.id
    return data


def list_documents(collection):
    """컬렉션 전체 조회 (order_index 오름차순, 같은 순서면 최신순)"""
    docs = [_snapshot_to_dict(doc) for doc in get_db().collection(collection).stream()]
    docs.sort(key=lambda d: d.get('created_at') or '', reverse=True)
    docs.sort(key=lambda d: d.get('order_index', 0))
    return docs


def get_document(collection, doc_id):
    """문서 조회"""
    doc = get_db().collection(collection).document(doc_id).get()
    return _snapshot_to_dict(doc) if doc.exists else None


def create_document(collection, data, doc_id=None):
    """문서 생성 후 ID 반환"""
    ref = get_db().collection(collection).document(doc_id) if doc_id else get_db().collection(collection).document()
    now = datetime.utcnow().isoformat()
    data = dict(data)
    data.setdefault('created_at', now)
    data.setdefault('updated_at', now)
    ref.set(data)
    return ref.id


def update_document(collection, doc_id, data):
    """문서 업데이트"""
    data = dict(data)
    data['updated_at'] = datetime.utcnow().isoformat()
    get_db().collection(collection).document(doc_id).update(data)


def delete_document(collection, doc_id):
    """문서 삭제"""
    get_db().collection(collection).document(doc_id).delete()


def missing_ids(collection, ids):
    """존재하지 않는 문서 ID 목록"""
    col = get_db().collection(collection)
    return [doc_id for doc_id in ids if not col.document(doc_id).get().exists]


def batch_update(collection, updates):
    """여러 문서를 하나의 WriteBatch로 업데이트 (전부 성공 또는 전부 실패)

    updates: [(doc_id, data), ...]
    """
    db = get_db()
    batch = db.batch()
    now = datetime.utcnow().isoformat()
    for doc_id, data in updates:
        data = dict(data)
        data['updated_at'] = now
        batch.update(db.collection(collection).document(doc_id), data)
    batch.commit()


def batch_delete(collection, ids):
    """여러 문서를 하나의 WriteBatch로 삭제"""
    db = get_db()
    batch = db.batch()
    for doc_id in ids:
        batch.delete(db.collection(collection).document(doc_id))
    batch.commit()


def next_order_index(collection):
    """새 문서의 order_index (비어 있으면 0)"""
    indices = [
        doc.to_dict().get('order_index')
        for doc in get_db().collection(collection).stream()
    ]
    indices = [i for i in indices if isinstance(i, int)]
    return max(indices) + 1 if indices else 0


def query_documents(collection, field, value):
    """단일 필드 동등 조건 조회"""
    docs = get_db().collection(collection).where(field, '==', value).stream()
    return [_snapshot_to_dict(doc) for doc in docs]
