"""
Unit Tests for User Profile API Endpoints
"""
import pytest
from httpx import AsyncClient


class TestUserEndpoints:

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, student, student_headers):
        response = await client.get('/api/v1/users/me', headers=student_headers)

        assert response.status_code == 200
        assert response.json()['id'] == student.id
        assert response.json()['role'] == 'student'

    @pytest.mark.asyncio
    async def test_view_other_user(self, client: AsyncClient, student, other_student, faculty_headers, auth_headers):
        as_faculty = await client.get(f'/api/v1/users/{student.id}', headers=faculty_headers)
        as_student = await client.get(f'/api/v1/users/{student.id}', headers=auth_headers(other_student))

        assert as_faculty.status_code == 200
        assert as_student.status_code == 403

    @pytest.mark.asyncio
    async def test_update_own_profile(self, client: AsyncClient, faculty, faculty_headers):
        response = await client.patch(
            f'/api/v1/users/{faculty.id}',
            json={'phone': '9876543210', 'department': 'CSE', 'position': 'Professor', 'expertise': 'Databases'},
            headers=faculty_headers
        )

        assert response.status_code == 200
        assert response.json()['position'] == 'Professor'
        assert response.json()['profile_completed'] is True

    @pytest.mark.asyncio
    async def test_cannot_update_others(self, client: AsyncClient, student, faculty_headers):
        response = await client.patch(f'/api/v1/users/{student.id}', json={'bio': 'x'}, headers=faculty_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_profile_completion(self, client: AsyncClient, student_headers):
        response = await client.get('/api/v1/users/me/profile-completion', headers=student_headers)

        assert response.status_code == 200
        body = response.json()
        assert body['is_complete'] is False
        assert 'phone' in body['missing_fields']
