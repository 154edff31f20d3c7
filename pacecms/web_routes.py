# pacecms/web_routes.py
from flask import Blueprint, render_template, request, redirect, url_for, session
from pacecms.auth import session_required, check_admin_credentials
from pacecms.api_routes import RESOURCES
from pacecms.database import list_documents
import logging

logger = logging.getLogger(__name__)

web_bp = Blueprint('web', __name__)


@web_bp.route('/')
def login_page():
    """로그인 페이지"""
    if session.get('logged_in'):
        return redirect(url_for('web.dashboard'))
    return render_template('login.html')


@web_bp.route('/login', methods=['POST'])
def login():
    """로그인 처리"""
    pw = request.form.get('password', '')
    email = request.form.get('email', '')

    if check_admin_credentials(email, pw):
        session['logged_in'] = True
        return redirect(url_for('web.dashboard'))
    logger.warning(f"관리자 로그인 실패: {email}")
    return render_template('login.html', error="이메일 또는 비밀번호가 올바르지 않습니다."), 401


@web_bp.route('/logout', methods=['POST'])
def logout():
    session.pop('logged_in', None)
    return redirect(url_for('web.login_page'))


@web_bp.route('/admin')
@session_required
def dashboard():
    """관리자 대시보드 - 리소스별 항목 수"""
    sections = []
    for slug, resource in RESOURCES.items():
        docs = list_documents(resource.collection)
        sections.append({
            'slug': slug,
            'label': resource.label,
            'total': len(docs),
            'public': sum(1 for doc in docs if resource.is_public(doc))
        })
    return render_template('dashboard.html', sections=sections)
