# pacecms/scheduler.py

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from datetime import datetime, timedelta
from urllib.parse import urlparse, parse_qs
from pacecms.config import COLLECTIONS, URL_REFRESH_HOURS, URL_SAFETY_MARGIN_MINUTES
from pacecms.database import get_db
from pacecms.storage import generate_presigned_url
import logging
import atexit

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(
    timezone='UTC',
    job_defaults={
        'coalesce': True,
        'max_instances': 1
    }
)

# 저장된 오브젝트 키 -> 갱신할 URL 필드
URL_FIELDS = {
    'thumbnail_key': 'thumbnail',
    'file_key': 'bucket_url',
}


def is_presigned_url_expired(url, safety_margin_minutes=60):
    """Presigned URL 만료 확인"""
    try:
        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        if 'X-Amz-Date' not in query or 'X-Amz-Expires' not in query:
            return True
        issued_str = query['X-Amz-Date'][0]
        expires_in = int(query['X-Amz-Expires'][0])
        issued_time = datetime.strptime(issued_str, '%Y%m%dT%H%M%SZ')
        expiry_time = issued_time + timedelta(seconds=expires_in)
        margin_time = datetime.utcnow() + timedelta(minutes=safety_margin_minutes)
        return margin_time >= expiry_time
    except (ValueError, IndexError) as e:
        logger.warning(f"URL 검사 중 오류: {e}")
        return True


def _needs_refresh(url):
    return not url or is_presigned_url_expired(url, safety_margin_minutes=URL_SAFETY_MARGIN_MINUTES)


def build_url_updates(data):
    """문서에서 만료 임박한 URL 필드의 갱신값 계산"""
    update_data = {}
    for key_field, url_field in URL_FIELDS.items():
        key = data.get(key_field)
        if key and _needs_refresh(data.get(url_field, '')):
            update_data[url_field] = generate_presigned_url(key)

    videos = data.get('videos') or []
    if any(v.get('video_key') and _needs_refresh(v.get('video_url', '')) for v in videos):
        update_data['videos'] = [
            {**v, 'video_url': generate_presigned_url(v['video_key'])}
            if v.get('video_key') and _needs_refresh(v.get('video_url', '')) else v
            for v in videos
        ]
    return update_data


def refresh_expiring_urls():
    """만료 임박한 URL 갱신"""
    logger.info("🔄 백그라운드 URL 갱신 작업 시작...")
    updated_count = 0
    total_count = 0

    for collection in COLLECTIONS.values():
        try:
            docs = get_db().collection(collection).stream()
        except Exception as e:
            logger.error(f"❌ {collection} 조회 실패: {e}")
            continue

        for doc in docs:
            total_count += 1
            try:
                update_data = build_url_updates(doc.to_dict() or {})
                if not update_data:
                    continue
                update_data['auto_updated_at'] = datetime.utcnow().isoformat()
                update_data['auto_update_reason'] = 'background_refresh'
                doc.reference.update(update_data)
                updated_count += 1
                logger.info(f"✅ {collection}/{doc.id} URL 갱신 완료")
            except Exception as e:
                logger.error(f"❌ {collection}/{doc.id} URL 갱신 실패: {e}")

    logger.info(f"🎉 URL 갱신 완료: {updated_count}/{total_count} 개")
    return updated_count


def start_scheduler():
    """스케줄러 시작"""
    try:
        scheduler.add_job(
            func=refresh_expiring_urls,
            trigger=IntervalTrigger(hours=URL_REFRESH_HOURS),
            id='refresh_urls',
            name='URL 자동 갱신',
            replace_existing=True
        )

        scheduler.start()
        logger.info("🚀 백그라운드 스케줄러가 시작되었습니다.")

        # 앱 종료 시 스케줄러도 함께 종료
        atexit.register(lambda: scheduler.shutdown())

    except Exception as e:
        logger.error(f"❌ 스케줄러 시작 실패: {e}")
