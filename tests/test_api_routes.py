import io
from datetime import date, timedelta

import pytest


def seed_visuals(fake_db, *ids):
    for index, visual_id in enumerate(ids):
        fake_db.add('main_visuals', visual_id, title=f'Visual {visual_id}', description='desc',
                    is_public=True, order_index=index, link='/courses', link_name='Go',
                    created_at=f'2026-01-0{index + 1}T00:00:00')


def test_write_endpoints_require_admin(client, fake_db):
    seed_visuals(fake_db, 'A')
    assert client.patch('/api/main-visual/reorder', json={'items': []}).status_code == 401
    assert client.delete('/api/main-visual/A').status_code == 401
    assert client.post('/api/courses', json={'title': 'x'}).status_code == 401
    assert 'A' in fake_db.data['main_visuals']


def test_admin_login_rejects_bad_password(client):
    res = client.post('/api/admin/login', json={'email': 'admin@pace.test', 'password': 'nope'})
    assert res.status_code == 401
    assert res.get_json() == {'error': '관리자 인증 실패'}


def test_list_orders_by_order_index(client, fake_db):
    fake_db.add('main_visuals', 'B', title='B', is_public=False, order_index=1)
    fake_db.add('main_visuals', 'A', title='A', is_public=True, order_index=0)
    res = client.get('/api/main-visual')
    assert res.status_code == 200
    rows = res.get_json()
    assert [r['id'] for r in rows] == ['A', 'B']
    assert rows[0]['status'] == '공개중'
    assert rows[1]['status'] == '비공개'
    assert rows[0]['period'] == '-'


def test_reorder_rewrites_every_index_in_one_batch(client, fake_db, admin_headers):
    seed_visuals(fake_db, 'A', 'B', 'C', 'D')
    items = [{'id': 'A', 'orderIndex': 0}, {'id': 'D', 'orderIndex': 1},
             {'id': 'B', 'orderIndex': 2}, {'id': 'C', 'orderIndex': 3}]

    res = client.patch('/api/main-visual/reorder', json={'items': items}, headers=admin_headers)

    assert res.status_code == 200
    assert res.get_json() == {'message': 'Order updated'}
    assert fake_db.commits == 1
    assert [r['id'] for r in client.get('/api/main-visual').get_json()] == ['A', 'D', 'B', 'C']


def test_reorder_rejects_invalid_payload(client, fake_db, admin_headers):
    seed_visuals(fake_db, 'A')
    res = client.patch('/api/main-visual/reorder', json={'items': 'nope'}, headers=admin_headers)
    assert res.status_code == 400
    assert 'error' in res.get_json()


def test_reorder_with_unknown_id_writes_nothing(client, fake_db, admin_headers):
    seed_visuals(fake_db, 'A', 'B')
    items = [{'id': 'B', 'orderIndex': 0}, {'id': 'ghost', 'orderIndex': 1}]
    res = client.patch('/api/main-visual/reorder', json={'items': items}, headers=admin_headers)
    assert res.status_code == 404
    assert res.get_json()['ids'] == ['ghost']
    assert fake_db.data['main_visuals']['B']['order_index'] == 1
    assert fake_db.commits == 0


def test_create_main_visual_appends_to_end(client, fake_db, admin_headers):
    seed_visuals(fake_db, 'A', 'B')
    res = client.post('/api/main-visual', json={
        'title': '새 배너', 'description': '설명', 'status': 'public',
        'startDate': '2026-10-01', 'endDate': '2026-10-31',
        'startTime': '09:00', 'endTime': '18:00',
        'link': '/courses', 'linkName': '보러가기'
    }, headers=admin_headers)

    assert res.status_code == 201
    body = res.get_json()
    assert body['isPublic'] is True
    assert body['orderIndex'] == 2
    assert body['startDate'] == '2026-10-01'
    stored = fake_db.data['main_visuals'][body['id']]
    assert stored['link_name'] == '보러가기'


def test_create_into_empty_collection_starts_at_zero(client, fake_db, admin_headers):
    res = client.post('/api/courses', json={'title': 'Resume 101', 'price': '49'}, headers=admin_headers)
    assert res.status_code == 201
    assert res.get_json()['orderIndex'] == 0
    assert res.get_json()['category'] == 'NETWORKING'


def test_create_main_visual_reports_field_errors(client, admin_headers):
    res = client.post('/api/main-visual', json={
        'title': '', 'description': '설명', 'startDate': '2026-10-31', 'endDate': '2026-10-01'
    }, headers=admin_headers)

    assert res.status_code == 400
    fields = res.get_json()['fields']
    assert fields['title'] == '비주얼 제목을 입력해주세요.'
    assert fields['status'] == '공개 여부를 선택해주세요.'
    assert fields['link'] == '링크 또는 이름을 등록해주세요.'
    assert fields['period'] == '시작일은 종료일보다 앞서야 합니다.'


def test_same_day_schedule_requires_ordered_times(client, admin_headers):
    res = client.post('/api/main-visual', json={
        'title': 't', 'description': 'd', 'status': 'public', 'link': '/', 'linkName': 'n',
        'startDate': '2026-10-01', 'endDate': '2026-10-01', 'startTime': '18:00', 'endTime': '09:00'
    }, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()['fields']['period'] == '시작시간은 종료시간보다 앞서야 합니다.'


def test_multipart_create_uploads_image(client, fake_db, fake_s3, admin_headers):
    data = {
        'title': '배너', 'description': '설명', 'status': 'public', 'link': '/x', 'linkName': 'x',
        'image': (io.BytesIO(b'\x89PNG'), 'hero image.png', 'image/png'),
    }
    res = client.post('/api/main-visual', data=data, headers=admin_headers,
                      content_type='multipart/form-data')

    assert res.status_code == 201
    stored = fake_db.data['main_visuals'][res.get_json()['id']]
    assert stored['thumbnail_key'].startswith('main-visual/')
    assert stored['thumbnail_key'].endswith('_hero_image.png')
    assert stored['thumbnail'].startswith('https://s3.test/main-visual/')
    fake_s3.upload_fileobj.assert_called_once()


def test_multipart_rejects_wrong_extension(client, fake_s3, admin_headers):
    data = {
        'title': '배너', 'description': '설명', 'status': 'public', 'link': '/x', 'linkName': 'x',
        'image': (io.BytesIO(b'MZ'), 'virus.exe'),
    }
    res = client.post('/api/main-visual', data=data, headers=admin_headers,
                      content_type='multipart/form-data')
    assert res.status_code == 400
    assert 'image' in res.get_json()['fields']
    fake_s3.upload_fileobj.assert_not_called()


def test_bulk_status_update_maps_labels(client, fake_db, admin_headers):
    fake_db.add('courses', 'c1', title='One', is_public=False, order_index=0)
    fake_db.add('courses', 'c2', title='Two', is_public=True, order_index=1)

    res = client.put('/api/courses', json={'updates': [
        {'id': 'c1', 'status': '공개중'},
        {'id': 'c2', 'isPublic': False},
    ]}, headers=admin_headers)

    assert res.status_code == 200
    assert fake_db.data['courses']['c1']['is_public'] is True
    assert fake_db.data['courses']['c2']['is_public'] is False
    assert fake_db.data['courses']['c1']['title'] == 'One'
    assert fake_db.commits == 1


def test_bulk_update_requires_array(client, admin_headers):
    res = client.put('/api/courses', json={'updates': {'id': 'c1'}}, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json() == {'error': 'Updates must be an array'}


def test_bulk_delete_and_single_delete(client, fake_db, admin_headers):
    for doc_id in ('e1', 'e2', 'e3'):
        fake_db.add('documents', doc_id, title=doc_id, is_public=True)

    res = client.delete('/api/ebooks', json={'ids': ['e1', 'e2']}, headers=admin_headers)
    assert res.status_code == 200
    assert list(fake_db.data['documents']) == ['e3']

    assert client.delete('/api/ebooks/e3', headers=admin_headers).status_code == 200
    assert client.delete('/api/ebooks/e3', headers=admin_headers).status_code == 404


def test_bulk_delete_rejects_empty_ids(client, admin_headers):
    res = client.delete('/api/ebooks', json={'ids': []}, headers=admin_headers)
    assert res.status_code == 400


def test_status_patch(client, fake_db, admin_headers):
    seed_visuals(fake_db, 'A')
    res = client.patch('/api/main-visual/A/status', json={'isPublic': False}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['status'] == '비공개'
    assert fake_db.data['main_visuals']['A']['is_public'] is False

    bad = client.patch('/api/main-visual/A/status', json={'status': 'draft'}, headers=admin_headers)
    assert bad.status_code == 400


def test_get_missing_item_returns_error_envelope(client, fake_db):
    res = client.get('/api/workshops/nope')
    assert res.status_code == 404
    assert 'error' in res.get_json()


def test_update_keeps_unsent_fields(client, fake_db, admin_headers):
    fake_db.add('courses', 'c1', title='Old', description='keep me', price=10,
                category='RESUME', is_public=True, order_index=0)
    res = client.put('/api/courses/c1', json={'title': 'New'}, headers=admin_headers)
    assert res.status_code == 200
    stored = fake_db.data['courses']['c1']
    assert stored['title'] == 'New'
    assert stored['description'] == 'keep me'
    assert stored['category'] == 'RESUME'


def test_active_main_visuals_respect_schedule(client, fake_db):
    today = date.today()
    fake_db.add('main_visuals', 'live', title='live', is_public=True, order_index=0,
                start_date=(today - timedelta(days=1)).isoformat(), start_time='00:00',
                end_date=(today + timedelta(days=1)).isoformat(), end_time='23:59')
    fake_db.add('main_visuals', 'future', title='future', is_public=True, order_index=1,
                start_date=(today + timedelta(days=3)).isoformat(), start_time='00:00')
    fake_db.add('main_visuals', 'hidden', title='hidden', is_public=False, order_index=2)
    fake_db.add('main_visuals', 'open', title='open', is_public=True, order_index=3,
                link='/ebooks', link_name='E-books')

    slides = client.get('/api/main-visual/active').get_json()
    assert [s['id'] for s in slides] == ['live', 'open']
    assert slides[0]['buttonText'] == 'Explore programs'
    assert slides[1]['route'] == '/ebooks'


def test_list_counts_likes_and_purchases(client, fake_db):
    fake_db.add('documents', 'e1', title='Playbook', is_public=True, price=19, category='IT', order_index=0)
    fake_db.add('favorites', 'f1', item_id='e1', item_type='EBOOK')
    fake_db.add('favorites', 'f2', item_id='e1', item_type='EBOOK')
    fake_db.add('favorites', 'f3', item_id='e1', item_type='COURSE')
    fake_db.add('order_items', 'o1', item_id='e1', item_type='EBOOK', quantity=1, order_status='COMPLETED')
    fake_db.add('order_items', 'o2', item_id='e1', item_type='EBOOK', quantity=1, order_status='PENDING')

    rows = client.get('/api/ebooks').get_json()
    assert rows[0]['likes'] == 2
    assert rows[0]['purchases'] == 1
    assert rows[0]['categoryLabel'] == 'IT/개발'


def test_workshop_public_toggle_uses_hidden_status(client, fake_db, admin_headers):
    fake_db.add('workshops', 'w1', title='Night', status='ONGOING', start_date='2026-10-01',
                end_date='2026-10-02', order_index=0)

    res = client.put('/api/workshops', json={'updates': [{'id': 'w1', 'isPublic': False}]},
                     headers=admin_headers)
    assert res.status_code == 200
    assert fake_db.data['workshops']['w1']['status'] == 'HIDDEN'

    client.patch('/api/workshops/w1/status', json={'isPublic': True}, headers=admin_headers)
    assert fake_db.data['workshops']['w1']['status'] == 'RECRUITING'

    row = client.get('/api/workshops').get_json()[0]
    assert row['startDate'] == '2026.10.01'
    assert row['workshopStatus'] == 'RECRUITING'
    assert row['isPublic'] is True


def test_workshop_end_before_start_rejected(client, admin_headers):
    res = client.post('/api/workshops', json={
        'title': 'Night', 'startDate': '2026-10-05', 'endDate': '2026-10-01'
    }, headers=admin_headers)
    assert res.status_code == 400
    assert 'endDate' in res.get_json()['fields']


def test_ebook_create_maps_recommended_labels(client, fake_db, admin_headers):
    res = client.post('/api/ebooks', json={
        'category': 'marketing', 'status': 'public', 'title': 'Playbook', 'intro': 'Intro',
        'price': '19', 'thumbnailUrl': 'https://cdn.test/t.png', 'fileUrl': 'https://cdn.test/f.pdf',
        'recommended': ['IT 개발', '인터뷰 준비'],
        'sections': [{'title': '1장', 'content': '내용'}],
        'links': [{'url': 'https://pace.test', 'name': 'Pace'}]
    }, headers=admin_headers)

    assert res.status_code == 201
    stored = fake_db.data['documents'][res.get_json()['id']]
    assert stored['category'] == 'MARKETING'
    assert stored['target_audience_types'] == ['IT', 'INTERVIEW']
    assert stored['bucket_url'] == 'https://cdn.test/f.pdf'
    assert stored['price'] == 19


def test_ebook_create_requires_files_and_fields(client, admin_headers):
    res = client.post('/api/ebooks', json={'sections': [{'title': '', 'content': ''}]},
                      headers=admin_headers)
    assert res.status_code == 400
    fields = res.get_json()['fields']
    for name in ('category', 'status', 'title', 'intro', 'price', 'thumbnail', 'file', 'sections'):
        assert name in fields


def test_course_detail_includes_reviews_and_audiences(client, fake_db):
    fake_db.add('instructors', 'i1', name='Sarah Kim')
    fake_db.add('courses', 'c1', title='Resume 101', is_public=True, instructor_id='i1',
                target_audience_types=['RESUME'],
                sections=[{'title': 'B', 'order_index': 1}, {'title': 'A', 'order_index': 0}])
    fake_db.add('reviews', 'r1', course_id='c1', rating=5, created_at='2026-01-02')
    fake_db.add('reviews', 'r2', course_id='c1', rating=4, created_at='2026-01-01')

    res = client.get('/api/courses/c1/detail')
    assert res.status_code == 200
    data = res.get_json()['data']
    assert [s['title'] for s in data['course']['sections']] == ['A', 'B']
    assert data['course']['targetAudiences'][0]['label'] == 'Resume'
    assert data['instructor']['name'] == 'Sarah Kim'
    assert data['reviews']['count'] == 2
    assert data['reviews']['averageRating'] == 4.5

    assert client.get('/api/courses/ghost/detail').status_code == 404


def test_check_auth(client, admin_headers):
    assert client.get('/api/admin/check_auth').get_json() == {'authenticated': False}
    assert client.get('/api/admin/check_auth', headers=admin_headers).get_json() == {'authenticated': True}


@pytest.mark.parametrize('slug, payload', [
    ('ebooks', {'sections': ['chapter one']}),
    ('ebooks', {'links': ['http://a']}),
    ('courses', {'title': 'Resume 101', 'sections': ['chapter one']}),
])
def test_malformed_list_items_are_field_errors(client, admin_headers, slug, payload):
    res = client.post(f'/api/{slug}', json=payload, headers=admin_headers)
    assert res.status_code == 400
    fields = res.get_json()['fields']
    assert any(name in fields for name in ('sections', 'links'))


def test_numeric_section_title_is_stored_as_text(client, fake_db, admin_headers):
    res = client.post('/api/courses', json={'title': 'Resume 101', 'sections': [{'title': 5}]},
                      headers=admin_headers)
    assert res.status_code == 201
    stored = fake_db.data['courses'][res.get_json()['id']]
    assert stored['sections'][0]['title'] == '5'


@pytest.mark.parametrize('bad_id', [5, None, ''])
def test_bulk_update_rejects_non_string_ids(client, fake_db, admin_headers, bad_id):
    fake_db.add('courses', 'c1', title='One', is_public=False, order_index=0)
    res = client.put('/api/courses', json={'updates': [{'id': bad_id, 'isPublic': True}]},
                     headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json() == {'error': 'Every update needs an id'}
    assert fake_db.commits == 0
