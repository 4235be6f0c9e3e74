"""
Unit Tests for route-level access control
"""
import pytest
from httpx import AsyncClient

ADMIN_ROUTES = [
    ('GET', '/api/admin/sections'),
    ('POST', '/api/admin/sections'),
    ('DELETE', '/api/admin/sections/some-id'),
    ('GET', '/api/admin/students'),
    ('POST', '/api/admin/students'),
    ('DELETE', '/api/admin/students/some-id'),
    ('GET', '/api/admin/files'),
    ('POST', '/api/admin/files'),
    ('DELETE', '/api/admin/files/some-id'),
    ('GET', '/api/admin/news'),
    ('POST', '/api/admin/news'),
    ('DELETE', '/api/admin/news/some-id'),
    ('GET', '/api/admin/knowledge-base'),
    ('POST', '/api/admin/knowledge-base'),
    ('DELETE', '/api/admin/knowledge-base/some-id'),
]

STUDENT_ROUTES = [
    ('GET', '/api/student/sections', None),
    ('GET', '/api/student/files/some-id', None),
    ('GET', '/api/student/news', None),
    ('POST', '/api/student/assistant/search', {'query': 'library'}),
]


def _json_for(method: str):
    return {} if method == 'POST' else None


class TestAdminRoutes:

    @pytest.mark.asyncio
    @pytest.mark.parametrize('method, path', ADMIN_ROUTES)
    async def test_student_forbidden(self, client: AsyncClient, auth_headers, method, path):
        response = await client.request(method, path, headers=auth_headers, json=_json_for(method))

        assert response.status_code == 403
        assert response.json()['message'] == 'Admin access required'

    @pytest.mark.asyncio
    @pytest.mark.parametrize('method, path', ADMIN_ROUTES)
    async def test_anonymous_unauthorized(self, client: AsyncClient, method, path):
        response = await client.request(method, path, json=_json_for(method))

        assert response.status_code == 401
        assert response.json()['message'] == 'No token provided'


class TestStudentRoutes:

    @pytest.mark.asyncio
    @pytest.mark.parametrize('method, path, body', STUDENT_ROUTES)
    async def test_student_allowed(self, client: AsyncClient, auth_headers, method, path, body):
        response = await client.request(method, path, headers=auth_headers, json=body)
        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize('method, path, body', STUDENT_ROUTES)
    async def test_admin_allowed(self, client: AsyncClient, admin_auth_headers, method, path, body):
        response = await client.request(method, path, headers=admin_auth_headers, json=body)
        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize('method, path, body', STUDENT_ROUTES)
    async def test_anonymous_unauthorized(self, client: AsyncClient, method, path, body):
        response = await client.request(method, path, json=body)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, client: AsyncClient, student_user):
        from datetime import timedelta
        from campus_portal.core.security import create_access_token

        token = create_access_token(
            {'sub': student_user.id, 'university_id': student_user.university_id, 'role': 'student'},
            expires_delta=timedelta(seconds=-1),
        )
        response = await client.get('/api/student/news', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401
        assert response.json()['code'] == 'TOKEN_EXPIRED'
