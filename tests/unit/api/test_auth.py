"""
Unit Tests for Authentication API Endpoints
"""
import pytest
from httpx import AsyncClient
from faker import Faker

from campus_portal.core.security import decode_token

fake = Faker()


class TestLogin:
    """Test login endpoint"""

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, student_user):
        response = await client.post('/api/auth/login', json={
            'universityId': student_user.university_id,
            'password': 'studentpassword123',
        })

        assert response.status_code == 200
        data = response.json()
        assert data['user'] == {
            'id': student_user.id,
            'fullName': student_user.full_name,
            'universityId': student_user.university_id,
            'role': 'student',
            'createdAt': data['user']['createdAt'],
        }
        claims = decode_token(data['token'])
        assert claims['sub'] == student_user.id
        assert claims['role'] == 'student'
        assert claims['full_name'] == student_user.full_name

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, student_user):
        response = await client.post('/api/auth/login', json={
            'universityId': student_user.university_id,
            'password': 'wrongpassword',
        })

        assert response.status_code == 401
        assert response.json()['message'] == 'Invalid credentials'

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, client: AsyncClient, db_session):
        response = await client.post('/api/auth/login', json={
            'universityId': 'nobody',
            'password': 'whatever',
        })

        assert response.status_code == 401
        assert response.json()['message'] == 'Invalid credentials'

    @pytest.mark.asyncio
    @pytest.mark.parametrize('body, missing', [
        ({'password': 'x'}, ['universityId']),
        ({'universityId': 'x'}, ['password']),
        ({}, ['universityId', 'password']),
        ({'universityId': '', 'password': ''}, ['universityId', 'password']),
    ])
    async def test_login_missing_fields(self, client: AsyncClient, db_session, body, missing):
        response = await client.post('/api/auth/login', json=body)

        assert response.status_code == 400
        data = response.json()
        assert data['message'] == 'University ID and password are required'
        assert data['details']['missing'] == missing

    @pytest.mark.asyncio
    async def test_login_response_never_exposes_hash(self, client: AsyncClient, admin_user):
        response = await client.post('/api/auth/login', json={
            'universityId': admin_user.university_id,
            'password': 'adminpassword123',
        })

        assert response.status_code == 200
        assert 'hashedPassword' not in response.json()['user']
        assert '$2b$' not in response.text


class TestCurrentUser:
    """Test /me endpoint"""

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, student_user, auth_headers):
        response = await client.get('/api/auth/me', headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['id'] == student_user.id
        assert data['universityId'] == student_user.university_id
        assert 'hashedPassword' not in data

    @pytest.mark.asyncio
    async def test_me_without_token(self, client: AsyncClient):
        response = await client.get('/api/auth/me')

        assert response.status_code == 401
        assert response.json()['code'] == 'UNAUTHORIZED'

    @pytest.mark.asyncio
    async def test_me_with_malformed_token(self, client: AsyncClient):
        response = await client.get('/api/auth/me', headers={'Authorization': 'Bearer garbage'})

        assert response.status_code == 401
        assert response.json()['code'] == 'INVALID_TOKEN'

    @pytest.mark.asyncio
    async def test_token_outlives_deleted_user(self, client: AsyncClient, db_session, student_user, auth_headers):
        await db_session.delete(student_user)
        await db_session.commit()

        # Still authenticated (no revocation), but the record is gone
        response = await client.get('/api/auth/me', headers=auth_headers)
        assert response.status_code == 404

        response = await client.get('/api/student/sections', headers=auth_headers)
        assert response.status_code == 200
