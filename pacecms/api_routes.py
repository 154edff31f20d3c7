# pacecms/api_routes.py
from flask import Blueprint, request, jsonify
from functools import wraps
from pacecms.auth import admin_required, check_admin_credentials, create_jwt_for_admin, is_admin_request
from pacecms.aggregation import item_stats
from pacecms.config import COLLECTIONS
from pacecms.courses import CourseResource
from pacecms.database import (
    batch_delete, batch_update, create_document, delete_document, get_document,
    list_documents, missing_ids, next_order_index, update_document
)
from pacecms.ebooks import EbookResource
from pacecms.main_visual import MainVisualResource, is_visible, to_slide
from pacecms.models import parse_status
from pacecms.ordering import validate_reorder_items
from pacecms.scheduler import refresh_expiring_urls, scheduler
from pacecms.uploads import has_file, process_video_upload
from pacecms.utils import ValidationError, read_payload
from pacecms.workshops import WorkshopResource
import threading
import logging

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)

RESOURCES = {
    resource.slug: resource
    for resource in (
        CourseResource(COLLECTIONS['courses']),
        EbookResource(COLLECTIONS['ebooks']),
        WorkshopResource(COLLECTIONS['workshops']),
        MainVisualResource(COLLECTIONS['main-visual']),
    )
}

SLUG = "<any('courses', 'ebooks', 'workshops', 'main-visual'):slug>"


def handle_errors(action):
    """검증 오류는 400, 그 밖의 예외는 로그 후 500 {error}"""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ValidationError as e:
                return jsonify({'error': str(e), 'fields': e.fields}), 400
            except Exception as e:
                logger.error(f"{action} 실패: {e}")
                return jsonify({'error': f'Failed to {action}: {e}'}), 500
        return decorated
    return decorator


def _not_found(resource, ids):
    return jsonify({'error': f'{resource.label}을(를) 찾을 수 없습니다.', 'ids': list(ids)}), 404


# 관리자

@api_bp.route('/admin/login', methods=['POST'])
def api_admin_login():
    """관리자 로그인 API"""
    data = request.get_json(silent=True) or {}
    email = data.get('email', '').strip()
    password = data.get('password', '')

    if check_admin_credentials(email, password):
        token = create_jwt_for_admin()
        return jsonify({'token': token}), 200
    else:
        return jsonify({'error': '관리자 인증 실패'}), 401


@api_bp.route('/admin/check_auth', methods=['GET'])
def check_admin_auth():
    """관리자 인증 상태 확인"""
    return jsonify({'authenticated': is_admin_request()}), 200


@api_bp.route('/admin/refresh-urls', methods=['POST'])
@admin_required
def manual_refresh_urls():
    """수동 URL 갱신"""
    try:
        thread = threading.Thread(target=refresh_expiring_urls)
        thread.daemon = True
        thread.start()

        return jsonify({
            'message': 'URL 갱신 작업이 백그라운드에서 시작되었습니다.',
            'status': 'started'
        }), 200

    except Exception as e:
        logger.error(f"수동 URL 갱신 실패: {e}")
        return jsonify({'error': '갱신 작업 시작에 실패했습니다.'}), 500


@api_bp.route('/admin/scheduler-status', methods=['GET'])
@admin_required
def get_scheduler_status():
    """스케줄러 상태 확인"""
    jobs = []
    for job in scheduler.get_jobs():
        jobs.append({
            'id': job.id,
            'name': job.name,
            'next_run': job.next_run_time.isoformat() if getattr(job, 'next_run_time', None) else None,
            'trigger': str(job.trigger)
        })

    return jsonify({
        'running': scheduler.running,
        'jobs': jobs
    }), 200


# 메인 페이지 / 강의 상세

@api_bp.route('/main-visual/active', methods=['GET'])
@handle_errors('fetch active main visuals')
def get_active_main_visuals():
    """현재 게시 기간 안에 있는 공개 메인 비주얼"""
    resource = RESOURCES['main-visual']
    docs = [doc for doc in list_documents(resource.collection) if is_visible(doc)]
    return jsonify([to_slide(doc) for doc in docs]), 200


@api_bp.route('/courses/<item_id>/detail', methods=['GET'])
@handle_errors('fetch course')
def get_course_detail(item_id):
    resource = RESOURCES['courses']
    doc = get_document(resource.collection, item_id)
    if not doc:
        return jsonify({
            'success': False,
            'error': 'Course not found',
            'message': '코스를 찾을 수 없습니다.'
        }), 404
    return jsonify({'success': True, 'data': resource.course_detail(doc)}), 200


@api_bp.route('/courses/<item_id>/videos', methods=['POST'])
@admin_required
@handle_errors('upload course video')
def upload_course_video(item_id):
    """강의 비디오 업로드"""
    resource = RESOURCES['courses']
    file = request.files.get('file')
    if not has_file(file):
        return jsonify({'error': '파일이 필요합니다.'}), 400

    doc = get_document(resource.collection, item_id)
    if not doc:
        return _not_found(resource, [item_id])

    try:
        video = process_video_upload(file, item_id, request.form.get('title', ''))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    videos = list(doc.get('videos', [])) + [video]
    update_document(resource.collection, item_id, {'videos': videos})
    logger.info(f"✅ 강의 비디오 업로드 완료: {item_id}/{video['id']}")
    return jsonify(video), 201


# 리소스 공통 CRUD

@api_bp.route(f'/{SLUG}', methods=['GET'])
@handle_errors('fetch rows')
def list_rows(slug):
    resource = RESOURCES[slug]
    docs = list_documents(resource.collection)
    favorites, purchases = item_stats(resource.item_type, resource.completed_purchases_only)
    rows = [resource.to_row(doc, favorites, purchases).to_dict() for doc in docs]
    return jsonify(rows), 200


@api_bp.route(f'/{SLUG}/<item_id>', methods=['GET'])
@handle_errors('fetch item')
def get_item(slug, item_id):
    resource = RESOURCES[slug]
    doc = get_document(resource.collection, item_id)
    if not doc:
        return _not_found(resource, [item_id])
    return jsonify(resource.to_detail(doc)), 200


@api_bp.route(f'/{SLUG}', methods=['POST'])
@admin_required
@handle_errors('create item')
def create_item(slug):
    resource = RESOURCES[slug]
    data = resource.parse(read_payload(request), request.files)
    data['order_index'] = next_order_index(resource.collection)
    item_id = create_document(resource.collection, data)
    logger.info(f"✅ {resource.label} 생성 완료: {item_id}")
    return jsonify(resource.to_detail(get_document(resource.collection, item_id))), 201


@api_bp.route(f'/{SLUG}/<item_id>', methods=['PUT'])
@admin_required
@handle_errors('update item')
def update_item(slug, item_id):
    resource = RESOURCES[slug]
    existing = get_document(resource.collection, item_id)
    if not existing:
        return _not_found(resource, [item_id])

    data = resource.parse(read_payload(request), request.files, existing=existing)
    update_document(resource.collection, item_id, data)
    return jsonify(resource.to_detail(get_document(resource.collection, item_id))), 200


@api_bp.route(f'/{SLUG}', methods=['PUT'])
@admin_required
@handle_errors('update items')
def bulk_update_items(slug):
    """여러 항목을 한 번에 수정 (전부 반영 또는 전부 실패)"""
    resource = RESOURCES[slug]
    body = request.get_json(silent=True) or {}
    updates = body.get('updates')

    if not isinstance(updates, list):
        return jsonify({'error': 'Updates must be an array'}), 400
    if any(not isinstance(u, dict) or not (isinstance(u.get('id'), str) and u['id']) for u in updates):
        return jsonify({'error': 'Every update needs an id'}), 400

    ids = [u['id'] for u in updates]
    missing = missing_ids(resource.collection, ids)
    if missing:
        return _not_found(resource, missing)

    parsed = []
    for update in updates:
        existing = get_document(resource.collection, update['id'])
        payload = {k: v for k, v in update.items() if k != 'id'}
        parsed.append((update['id'], resource.parse(payload, existing=existing)))

    batch_update(resource.collection, parsed)
    logger.info(f"✅ {resource.label} {len(parsed)}건 일괄 수정")
    return jsonify({'message': f'{len(parsed)} {slug} updated successfully'}), 200


@api_bp.route(f'/{SLUG}/<item_id>', methods=['DELETE'])
@admin_required
@handle_errors('remove item')
def delete_item(slug, item_id):
    resource = RESOURCES[slug]
    if not get_document(resource.collection, item_id):
        return _not_found(resource, [item_id])
    delete_document(resource.collection, item_id)
    return jsonify({'message': f'{resource.label} removed successfully'}), 200


@api_bp.route(f'/{SLUG}', methods=['DELETE'])
@admin_required
@handle_errors('remove items')
def bulk_delete_items(slug):
    resource = RESOURCES[slug]
    body = request.get_json(silent=True) or {}
    ids = body.get('ids')

    if not isinstance(ids, list) or not ids or not all(isinstance(i, str) and i for i in ids):
        return jsonify({'error': 'ids must be a non-empty array'}), 400

    missing = missing_ids(resource.collection, ids)
    if missing:
        return _not_found(resource, missing)

    batch_delete(resource.collection, ids)
    logger.info(f"🗑️ {resource.label} {len(ids)}건 삭제")
    return jsonify({'message': f'{len(ids)} {slug} removed successfully'}), 200


@api_bp.route(f'/{SLUG}/reorder', methods=['PATCH'])
@admin_required
@handle_errors('reorder items')
def reorder_items(slug):
    """목록 순서 저장 - 모든 행의 order_index를 한 번에 갱신"""
    resource = RESOURCES[slug]
    body = request.get_json(silent=True) or {}

    try:
        pairs = validate_reorder_items(body.get('items'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    missing = missing_ids(resource.collection, [item_id for item_id, _ in pairs])
    if missing:
        return _not_found(resource, missing)

    batch_update(resource.collection, [
        (item_id, {'order_index': order_index}) for item_id, order_index in pairs
    ])
    return jsonify({'message': 'Order updated'}), 200


@api_bp.route(f'/{SLUG}/<item_id>/status', methods=['PATCH'])
@admin_required
@handle_errors('update status')
def update_status(slug, item_id):
    resource = RESOURCES[slug]
    body = request.get_json(silent=True) or {}

    try:
        is_public = parse_status(body['isPublic'] if 'isPublic' in body else body.get('status'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    existing = get_document(resource.collection, item_id)
    if not existing:
        return _not_found(resource, [item_id])

    update_document(resource.collection, item_id, resource.status_update(is_public, existing))
    return jsonify(resource.to_detail(get_document(resource.collection, item_id))), 200
