"""
Campus Portal - Test Configuration and Fixtures
"""
import os
import tempfile
from typing import AsyncGenerator
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment (before the app reads its settings)
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['UPLOAD_DIR'] = tempfile.mkdtemp(prefix='campus-portal-uploads-')
os.environ['LOG_LEVEL'] = 'WARNING'

from campus_portal.main import app
from campus_portal.core.database import Base, get_db
from campus_portal.core.security import get_password_hash
from campus_portal.models.user import User, UserRole
from campus_portal.services.broadcast import BroadcastChannel, get_broadcaster
from campus_portal.services.file_storage import LocalFileStorage, get_file_storage
from tests.helpers import FakeWebSocket, make_token

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def broadcaster() -> BroadcastChannel:
    return BroadcastChannel(queue_size=16)


@pytest.fixture
def storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(tmp_path / 'uploads', '/uploads')


@pytest_asyncio.fixture
async def listener(broadcaster: BroadcastChannel) -> AsyncGenerator[FakeWebSocket, None]:
    """A connected realtime session; inspect ``listener.events`` after ``await settle()``"""
    ws = FakeWebSocket()
    session = await broadcaster.connect(ws, user_id='listener', role='student')
    yield ws
    broadcaster.disconnect(session.session_id)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    broadcaster: BroadcastChannel,
    storage: LocalFileStorage,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database, broadcast and storage overrides"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster
    app.dependency_overrides[get_file_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db_session: AsyncSession, role: UserRole, password: str) -> User:
    user = User(
        full_name=fake.name(),
        university_id=fake.unique.bothify(text='20##??###').upper(),
        hashed_password=get_password_hash(password),
        role=role,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def student_user(db_session: AsyncSession) -> User:
    """Create a student test user"""
    return await _create_user(db_session, UserRole.STUDENT, 'studentpassword123')


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create an admin test user"""
    return await _create_user(db_session, UserRole.ADMIN, 'adminpassword123')


@pytest.fixture
def auth_headers(student_user: User) -> dict:
    """Authentication headers for the student user"""
    return {'Authorization': f'Bearer {make_token(student_user)}'}


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    """Authentication headers for the admin user"""
    return {'Authorization': f'Bearer {make_token(admin_user)}'}
