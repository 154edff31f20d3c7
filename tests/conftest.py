import copy
import itertools
import os
from collections import defaultdict
from unittest.mock import MagicMock

os.environ['ADMIN_EMAIL'] = 'admin@pace.test'
os.environ['ADMIN_PASSWORD'] = 'secret'

import pytest
from google.api_core.exceptions import NotFound

from pacecms import database, storage
from pacecms.app import create_app

_ids = itertools.count(1)


class FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self.id = reference.id
        self._data = copy.deepcopy(data)

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data)


class FakeDocRef:
    def __init__(self, db, collection, doc_id):
        self._db = db
        self._collection = collection
        self.id = doc_id

    @property
    def _docs(self):
        return self._db.data[self._collection]

    def get(self):
        return FakeSnapshot(self, self._docs.get(self.id))

    def set(self, data):
        self._docs[self.id] = copy.deepcopy(data)

    def update(self, data):
        if self.id not in self._docs:
            raise NotFound(f'{self._collection}/{self.id}')
        self._docs[self.id].update(copy.deepcopy(data))

    def delete(self):
        self._docs.pop(self.id, None)


class FakeQuery:
    def __init__(self, db, collection, filters=(), limit=None):
        self._db = db
        self._collection = collection
        self._filters = tuple(filters)
        self._limit = limit

    def where(self, field, op, value):
        assert op == '=='
        return FakeQuery(self._db, self._collection, self._filters + ((field, value),), self._limit)

    def limit(self, count):
        return FakeQuery(self._db, self._collection, self._filters, count)

    def stream(self):
        results = []
        for doc_id, data in list(self._db.data[self._collection].items()):
            if all(data.get(field) == value for field, value in self._filters):
                results.append(FakeSnapshot(FakeDocRef(self._db, self._collection, doc_id), data))
        return iter(results[:self._limit] if self._limit is not None else results)

    def get(self):
        return list(self.stream())


class FakeCollection(FakeQuery):
    def document(self, doc_id=None):
        return FakeDocRef(self._db, self._collection, doc_id or f'doc{next(_ids)}')


class FakeBatch:
    def __init__(self, db):
        self._db = db
        self._ops = []

    def set(self, ref, data):
        self._ops.append(('set', ref, data))

    def update(self, ref, data):
        self._ops.append(('update', ref, data))

    def delete(self, ref):
        self._ops.append(('delete', ref, None))

    def commit(self):
        # 전부 적용 또는 전부 실패
        for op, ref, _ in self._ops:
            if op == 'update' and not ref.get().exists:
                raise NotFound(ref.id)
        for op, ref, data in self._ops:
            if op == 'delete':
                ref.delete()
            else:
                getattr(ref, op)(data)
        self._db.commits += 1


class FakeFirestore:
    def __init__(self):
        self.data = defaultdict(dict)
        self.commits = 0

    def collection(self, name):
        return FakeCollection(self, name)

    def batch(self):
        return FakeBatch(self)

    def add(self, collection, doc_id, **fields):
        self.data[collection][doc_id] = fields
        return doc_id


def fake_presigned_url(ClientMethod, Params, ExpiresIn):
    return f"https://s3.test/{Params['Key']}?X-Amz-Date=20990101T000000Z&X-Amz-Expires={ExpiresIn}"


@pytest.fixture
def fake_db():
    db = FakeFirestore()
    database.init_db(db)
    yield db
    database._db = None


@pytest.fixture
def fake_s3():
    s3 = MagicMock()
    s3.generate_presigned_url.side_effect = fake_presigned_url
    storage.set_s3(s3)
    yield s3
    storage.set_s3(None)


@pytest.fixture
def app(fake_db, fake_s3):
    app = create_app({'TESTING': True})
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(client):
    res = client.post('/api/admin/login', json={'email': 'admin@pace.test', 'password': 'secret'})
    assert res.status_code == 200
    return {'Authorization': f"Bearer {res.get_json()['token']}"}
