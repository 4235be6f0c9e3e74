"""
Unit Tests for admin student management
"""
import pytest
from httpx import AsyncClient
from faker import Faker

from tests.helpers import settle

fake = Faker()


def _student_payload() -> dict:
    return {
        'fullName': fake.name(),
        'universityId': fake.unique.bothify(text='S-#######'),
        'password': fake.password(length=12),
    }


class TestStudents:

    @pytest.mark.asyncio
    async def test_list_only_students(self, client: AsyncClient, admin_user, student_user, admin_auth_headers):
        response = await client.get('/api/admin/students', headers=admin_auth_headers)

        assert response.status_code == 200
        students = response.json()
        assert [s['id'] for s in students] == [student_user.id]
        assert students[0]['role'] == 'student'
        assert 'hashedPassword' not in students[0]
        assert 'password' not in students[0]

    @pytest.mark.asyncio
    async def test_create_then_login(self, client: AsyncClient, admin_auth_headers):
        payload = _student_payload()

        response = await client.post('/api/admin/students', headers=admin_auth_headers, json=payload)

        assert response.status_code == 201
        created = response.json()
        assert created['universityId'] == payload['universityId']
        assert created['role'] == 'student'

        login = await client.post('/api/auth/login', json={
            'universityId': payload['universityId'], 'password': payload['password'],
        })
        assert login.status_code == 200
        assert login.json()['user']['id'] == created['id']

    @pytest.mark.asyncio
    async def test_duplicate_university_id(self, client: AsyncClient, student_user, admin_auth_headers):
        payload = _student_payload()
        payload['universityId'] = student_user.university_id

        response = await client.post('/api/admin/students', headers=admin_auth_headers, json=payload)

        assert response.status_code == 400
        assert response.json()['message'] == 'University ID already exists'

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: AsyncClient, admin_auth_headers):
        response = await client.post('/api/admin/students', headers=admin_auth_headers, json={'fullName': 'A B'})

        assert response.status_code == 400
        body = response.json()
        assert body['message'] == 'All fields are required'
        assert body['details']['missing'] == ['universityId', 'password']

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, student_user, admin_auth_headers):
        response = await client.delete(f'/api/admin/students/{student_user.id}', headers=admin_auth_headers)
        assert response.json() == {'message': 'Student deleted'}

        listed = (await client.get('/api/admin/students', headers=admin_auth_headers)).json()
        assert listed == []

    @pytest.mark.asyncio
    async def test_delete_refuses_admin_accounts(self, client: AsyncClient, admin_user, admin_auth_headers):
        response = await client.delete(f'/api/admin/students/{admin_user.id}', headers=admin_auth_headers)

        assert response.status_code == 404
        assert response.json()['message'] == 'Student not found'

    @pytest.mark.asyncio
    async def test_student_changes_not_broadcast(self, client: AsyncClient, admin_auth_headers, listener):
        created = (await client.post('/api/admin/students', headers=admin_auth_headers, json=_student_payload())).json()
        await client.delete(f"/api/admin/students/{created['id']}", headers=admin_auth_headers)
        await settle()

        assert listener.events == []
