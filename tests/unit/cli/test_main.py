"""
Unit Tests for CLI command dispatch
"""
import io
import json
import httpx
import pytest
from rich.console import Console

from cli.config import CLIConfig
from cli.live_view import PortalViews
from cli.main import create_parser, run_command
from cli.client import PortalClient
from cli.watch import VIEW_EVENTS, load, render

SECTION = {'id': 's-1', 'name': 'CS101', 'icon': '💻', 'description': None, 'createdAt': '2026-01-05T09:00:00'}
ENTRY = {'id': 'k-1', 'question': 'How do refunds work?', 'answer': 'Ask the finance office', 'createdAt': '2026-01-05T09:00:00'}


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if request.method == 'POST' and path == '/api/admin/sections':
        body = json.loads(request.content)
        return httpx.Response(201, json={**SECTION, 'name': body['name'], 'icon': body['icon']})
    if request.method == 'DELETE' and path == '/api/admin/students/u-1':
        return httpx.Response(200, json={'message': 'Student deleted'})
    if request.method == 'DELETE':
        return httpx.Response(404, json={'message': 'Section not found', 'code': 'SECTION_NOT_FOUND'})
    if path == '/api/admin/knowledge-base':
        return httpx.Response(200, json=[ENTRY])
    return httpx.Response(200, json=[])


@pytest.fixture
def config(tmp_path) -> CLIConfig:
    return CLIConfig(server_url='http://portal.test', config_dir=str(tmp_path), auth_token='admin-token')


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120)


def _output(console: Console) -> str:
    return console.file.getvalue()


class TestParser:

    def test_admin_subcommands(self):
        parser = create_parser()

        args = parser.parse_args(['admin', 'file', 'upload', 'notes.pdf', '-s', 's-1', '-n', 'Week 1'])
        assert (args.command, args.resource, args.action) == ('admin', 'file', 'upload')
        assert (args.path, args.section_id, args.file_name) == ('notes.pdf', 's-1', 'Week 1')

        args = parser.parse_args(['admin', 'student', 'add', 'S-1', 'Ada Lovelace', '-p', 'pw'])
        assert (args.university_id, args.full_name, args.password) == ('S-1', 'Ada Lovelace', 'pw')

    def test_knowledge_watch_view(self):
        args = create_parser().parse_args(['watch', 'knowledge'])
        assert args.view == 'knowledge'


class TestRunCommand:

    @pytest.mark.asyncio
    async def test_section_add(self, config, console):
        args = create_parser().parse_args(['admin', 'section', 'add', 'Math', '📐'])

        code = await run_command(args, config, console, transport=httpx.MockTransport(_handler))

        assert code == 0
        assert 'Section created' in _output(console)
        assert 'Math' in _output(console)

    @pytest.mark.asyncio
    async def test_student_rm(self, config, console):
        args = create_parser().parse_args(['admin', 'student', 'rm', 'u-1'])

        code = await run_command(args, config, console, transport=httpx.MockTransport(_handler))

        assert code == 0
        assert 'Student deleted' in _output(console)

    @pytest.mark.asyncio
    async def test_kb_ls_shows_ids(self, config, console):
        args = create_parser().parse_args(['admin', 'kb', 'ls'])

        await run_command(args, config, console, transport=httpx.MockTransport(_handler))

        assert 'k-1' in _output(console)
        assert 'How do refunds work?' in _output(console)

    @pytest.mark.asyncio
    async def test_missing_action(self, config, console):
        args = create_parser().parse_args(['admin', 'news'])

        assert await run_command(args, config, console, transport=httpx.MockTransport(_handler)) == 1

    @pytest.mark.asyncio
    async def test_requires_login(self, tmp_path, console):
        args = create_parser().parse_args(['admin', 'section', 'ls'])

        code = await run_command(args, CLIConfig(config_dir=str(tmp_path)), console)

        assert code == 1
        assert 'Authentication required' in _output(console)


class TestKnowledgeView:

    @pytest.mark.asyncio
    async def test_load_and_render(self, config, console):
        views = PortalViews()
        async with PortalClient(config, transport=httpx.MockTransport(_handler)) as client:
            await load(client, views, 'knowledge', None)

        assert views['knowledge'].ids() == ['k-1']
        views.apply({'type': 'knowledge-deleted', 'data': 'k-1'})

        console.print(render(views, 'knowledge', config, 'Connected'))
        assert 'How do refunds work?' not in _output(console)
        assert VIEW_EVENTS['knowledge'] == ['knowledge-added', 'knowledge-deleted']
