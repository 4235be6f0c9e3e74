"""
Unit Tests for request logging
"""
import logging
import pytest
from httpx import AsyncClient

from campus_portal.core.logging_config import logger


def _request_records(caplog):
    return [r for r in caplog.records if getattr(r, 'event_type', None) == 'http_request']


class TestLogRequest:

    def test_level_follows_status(self, caplog):
        caplog.set_level(logging.INFO, logger='campus_portal')

        logger.log_request('GET', '/api/student/news', 200, 3.2)
        logger.log_request('GET', '/api/student/news', 404, 1.0)
        logger.log_request('POST', '/api/admin/files', 500, 9.9)

        records = _request_records(caplog)
        assert [r.levelno for r in records] == [logging.INFO, logging.WARNING, logging.ERROR]
        assert records[1].http_status == 404
        assert records[2].http_method == 'POST'

    @pytest.mark.asyncio
    async def test_middleware_logs_each_request(self, client: AsyncClient, auth_headers, caplog):
        caplog.set_level(logging.INFO, logger='campus_portal')

        response = await client.get('/api/student/news', headers=auth_headers)

        assert response.headers['X-Request-ID']
        records = _request_records(caplog)
        assert len(records) == 1
        assert records[0].http_path == '/api/student/news'
        assert records[0].http_status == 200

    @pytest.mark.asyncio
    async def test_health_not_logged(self, client: AsyncClient, caplog):
        caplog.set_level(logging.INFO, logger='campus_portal')

        await client.get('/health')

        assert _request_records(caplog) == []
