"""
Unit Tests for admin knowledge base management
"""
import pytest
from httpx import AsyncClient

from tests.helpers import settle


class TestKnowledgeBase:

    @pytest.mark.asyncio
    async def test_add_list_delete(self, client: AsyncClient, admin_auth_headers, listener):
        created = await client.post('/api/admin/knowledge-base', headers=admin_auth_headers, json={
            'question': 'How do I get a refund?', 'answer': 'Ask the finance office.',
        })
        assert created.status_code == 201
        entry = created.json()
        assert entry['createdAt']

        listed = (await client.get('/api/admin/knowledge-base', headers=admin_auth_headers)).json()
        assert listed == [entry]

        deleted = await client.delete(f"/api/admin/knowledge-base/{entry['id']}", headers=admin_auth_headers)
        await settle()

        assert deleted.json() == {'message': 'Knowledge base entry deleted'}
        assert [(e['type'], e['data']) for e in listener.events] == [
            ('knowledge-added', entry),
            ('knowledge-deleted', entry['id']),
        ]

    @pytest.mark.asyncio
    async def test_missing_answer(self, client: AsyncClient, admin_auth_headers, listener):
        response = await client.post('/api/admin/knowledge-base', headers=admin_auth_headers, json={
            'question': 'Q?', 'answer': '  ',
        })
        await settle()

        assert response.status_code == 400
        assert response.json()['message'] == 'Question and answer are required'
        assert listener.events == []

    @pytest.mark.asyncio
    async def test_delete_unknown(self, client: AsyncClient, admin_auth_headers, listener):
        response = await client.delete('/api/admin/knowledge-base/missing', headers=admin_auth_headers)
        await settle()

        assert response.status_code == 404
        assert response.json()['message'] == 'Knowledge base entry not found'
        assert listener.events == []
