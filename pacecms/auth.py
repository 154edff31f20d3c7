# pacecms/auth.py
import jwt
from datetime import datetime, timedelta
from functools import wraps
from flask import request, jsonify, session, redirect, url_for
from pacecms.config import ADMIN_EMAIL, ADMIN_PASSWORD, JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRES_HOURS


def check_admin_credentials(email, password):
    """관리자 이메일/비밀번호 확인"""
    return bool(ADMIN_EMAIL) and email == ADMIN_EMAIL and password == ADMIN_PASSWORD


def create_jwt_for_admin():
    """관리자 JWT 토큰 생성"""
    now = datetime.utcnow()
    payload = {
        'sub': ADMIN_EMAIL,
        'iat': now,
        'exp': now + timedelta(hours=JWT_EXPIRES_HOURS)
    }
    token = jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)
    return token


def verify_jwt_token(token):
    """JWT 토큰 검증"""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        return payload.get('sub') == ADMIN_EMAIL
    except jwt.ExpiredSignatureError:
        return False
    except jwt.InvalidTokenError:
        return False


def is_admin_request():
    """세션 또는 Bearer 토큰 중 하나라도 유효하면 관리자"""
    if session.get('logged_in'):
        return True

    auth_header = request.headers.get('Authorization', None)
    if auth_header and auth_header.startswith('Bearer '):
        token = auth_header.split(' ', 1)[1]
        return verify_jwt_token(token)
    return False


def admin_required(f):
    """관리자 인증 데코레이터 - 세션 또는 JWT 토큰"""
    @wraps(f)
    def decorated(*args, **kwargs):
        if not is_admin_request():
            return jsonify({'error': '관리자 인증이 필요합니다'}), 401
        return f(*args, **kwargs)
    return decorated


def session_required(f):
    """세션 인증 데코레이터"""
    @wraps(f)
    def decorated(*args, **kwargs):
        if not session.get('logged_in'):
            return redirect(url_for('web.login_page'))
        return f(*args, **kwargs)
    return decorated
