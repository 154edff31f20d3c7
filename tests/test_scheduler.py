from datetime import datetime, timedelta

from pacecms.scheduler import build_url_updates, is_presigned_url_expired, refresh_expiring_urls


def signed_url(issued, expires_in=604800):
    return f"https://s3.test/key?X-Amz-Date={issued.strftime('%Y%m%dT%H%M%SZ')}&X-Amz-Expires={expires_in}"


def test_presigned_url_expiry():
    now = datetime.utcnow()
    assert not is_presigned_url_expired(signed_url(now))
    assert is_presigned_url_expired(signed_url(now - timedelta(days=7)))
    # 만료 30분 전이면 60분 여유 기준으로 만료 취급
    assert is_presigned_url_expired(signed_url(now - timedelta(seconds=3600 - 1800), expires_in=3600))


def test_url_without_signature_counts_as_expired():
    assert is_presigned_url_expired('https://cdn.test/plain.png')
    assert is_presigned_url_expired('https://s3.test/k?X-Amz-Date=bogus&X-Amz-Expires=10')


def test_build_url_updates_only_touches_stale_fields(fake_s3):
    fresh = signed_url(datetime.utcnow())
    updates = build_url_updates({
        'thumbnail_key': 'courses/t.png',
        'thumbnail': fresh,
        'file_key': 'ebooks/files/f.pdf',
        'bucket_url': '',
        'videos': [
            {'id': 'v1', 'video_key': 'courses/c1/videos/v1.mp4', 'video_url': 'https://old'},
            {'id': 'v2', 'video_key': 'courses/c1/videos/v2.mp4', 'video_url': fresh},
        ]
    })

    assert 'thumbnail' not in updates
    assert updates['bucket_url'].startswith('https://s3.test/ebooks/files/f.pdf')
    assert updates['videos'][0]['video_url'].startswith('https://s3.test/courses/c1/videos/v1.mp4')
    assert updates['videos'][1]['video_url'] == fresh


def test_build_url_updates_ignores_documents_without_keys(fake_s3):
    assert build_url_updates({'thumbnail': '/img/course_image1.png'}) == {}
    fake_s3.generate_presigned_url.assert_not_called()


def test_refresh_expiring_urls_updates_stale_documents(fake_db, fake_s3):
    fake_db.add('courses', 'c1', thumbnail_key='courses/a.png', thumbnail='https://old')
    fake_db.add('main_visuals', 'm1', thumbnail_key='main-visual/b.png',
                thumbnail=signed_url(datetime.utcnow()))
    fake_db.add('documents', 'e1', title='no files')

    assert refresh_expiring_urls() == 1
    course = fake_db.data['courses']['c1']
    assert course['thumbnail'].startswith('https://s3.test/courses/a.png')
    assert course['auto_update_reason'] == 'background_refresh'
    assert 'auto_updated_at' not in fake_db.data['main_visuals']['m1']
