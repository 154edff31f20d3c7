# pacecms/uploads.py
import tempfile
import uuid
from pathlib import Path
from datetime import datetime
from moviepy.video.io.VideoFileClip import VideoFileClip
import logging
from pacecms.config import ALLOWED_VIDEO_EXTENSIONS
from pacecms.storage import build_object_key, upload_fileobj, upload_to_s3, generate_presigned_url

logger = logging.getLogger(__name__)


def is_allowed_file(filename, allowed_extensions):
    """파일 확장자 확인"""
    return Path(filename or '').suffix.lower() in allowed_extensions


def has_file(file):
    return file is not None and bool(getattr(file, 'filename', ''))


def store_upload(file, prefix, allowed_extensions):
    """업로드 파일을 오브젝트 스토리지에 저장하고 키와 URL 반환"""
    if not is_allowed_file(file.filename, allowed_extensions):
        raise ValueError(f"지원하지 않는 파일 형식입니다. 지원 형식: {', '.join(sorted(allowed_extensions))}")

    key = build_object_key(prefix, file.filename)
    upload_fileobj(file.stream, key, content_type=file.mimetype)
    url = generate_presigned_url(key)
    logger.info(f"파일 업로드 완료: {key}")
    return {'key': key, 'url': url}


def get_video_duration(file_path):
    """비디오 길이 가져오기 (형식 무관)"""
    try:
        with VideoFileClip(str(file_path)) as clip:
            duration_sec = int(clip.duration)
            minutes = duration_sec // 60
            seconds = duration_sec % 60
            return f"{minutes}:{seconds:02d}", duration_sec
    except Exception as e:
        logger.warning(f"비디오 길이 가져오기 실패: {e}")
        return "0:00", 0


def process_video_upload(file, course_id, title):
    """강의 비디오 업로드 처리 (임시 파일로 길이 측정 후 S3 업로드)"""
    if not is_allowed_file(file.filename, ALLOWED_VIDEO_EXTENSIONS):
        raise ValueError(f"지원하지 않는 비디오 형식입니다. 지원 형식: {', '.join(sorted(ALLOWED_VIDEO_EXTENSIONS))}")

    ext = Path(file.filename).suffix.lower()
    video_id = uuid.uuid4().hex
    video_key = f"courses/{course_id}/videos/{video_id}{ext}"

    with tempfile.NamedTemporaryFile(suffix=ext, delete=False) as tmp_file:
        tmp_path = Path(tmp_file.name)
        file.save(tmp_path)

    try:
        duration_label, duration_sec = get_video_duration(tmp_path)
        logger.info(f"비디오 길이: {duration_label} (총 {duration_sec}초)")
        upload_to_s3(tmp_path, video_key)
    finally:
        tmp_path.unlink(missing_ok=True)

    return {
        'id': video_id,
        'title': title or Path(file.filename).stem,
        'video_key': video_key,
        'video_url': generate_presigned_url(video_key),
        'time': duration_label,
        'duration_seconds': duration_sec,
        'uploaded_at': datetime.utcnow().isoformat()
    }
