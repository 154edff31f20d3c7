# pacecms/api_client.py
import logging

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """2xx가 아닌 응답"""

    def __init__(self, status, message):
        self.status = status
        self.message = message
        super().__init__(f"[{status}] {message}")


class AdminApiClient:
    """관리자 REST API 클라이언트"""

    def __init__(self, base_url, token=None, session=None, timeout=30):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        if token:
            self.set_token(token)

    def set_token(self, token):
        self.session.headers['Authorization'] = f'Bearer {token}'

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}/api{path}"
        try:
            res = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"서버 연결 실패 ({method} {url}): {e}")
            raise ApiError(0, f'Failed to connect server: {e}')

        if not res.ok:
            try:
                message = res.json().get('error', res.reason)
            except ValueError:
                message = res.reason or res.text
            raise ApiError(res.status_code, message)

        return res.json() if res.content else None

    def login(self, email, password):
        data = self._request('POST', '/admin/login', json={'email': email, 'password': password})
        self.set_token(data['token'])
        return data['token']

    def list_rows(self, resource):
        return self._request('GET', f'/{resource}')

    def get(self, resource, item_id):
        return self._request('GET', f'/{resource}/{item_id}')

    def create(self, resource, data=None, files=None):
        if files:
            return self._request('POST', f'/{resource}', data=data, files=files)
        return self._request('POST', f'/{resource}', json=data)

    def update(self, resource, item_id, data=None, files=None):
        if files:
            return self._request('PUT', f'/{resource}/{item_id}', data=data, files=files)
        return self._request('PUT', f'/{resource}/{item_id}', json=data)

    def bulk_update(self, resource, updates):
        return self._request('PUT', f'/{resource}', json={'updates': updates})

    def delete(self, resource, item_id):
        return self._request('DELETE', f'/{resource}/{item_id}')

    def bulk_delete(self, resource, ids):
        return self._request('DELETE', f'/{resource}', json={'ids': list(ids)})

    def reorder(self, resource, payload):
        return self._request('PATCH', f'/{resource}/reorder', json=payload)

    def set_status(self, resource, item_id, is_public):
        return self._request('PATCH', f'/{resource}/{item_id}/status', json={'isPublic': is_public})
