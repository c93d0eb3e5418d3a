"""
Shiplog - Test Configuration and Fixtures
"""
import os
import tempfile
from datetime import datetime, timedelta
from typing import AsyncGenerator, Callable, Awaitable
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['STORAGE_MODE'] = 'local'
os.environ['LOCAL_STORAGE_PATH'] = tempfile.mkdtemp(prefix='shiplog-uploads-')
os.environ['PUBLIC_STORAGE_URL'] = 'http://test/uploads'

from app.main import app
from app.core.database import Base, get_db
from app.models import Category, WorkItem, ItemStatus
from app.services.image_storage import LocalImageStorage, get_image_storage

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest_asyncio.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def image_storage(tmp_path) -> LocalImageStorage:
    """Image storage writing into the test's temp directory"""
    return LocalImageStorage(str(tmp_path / 'uploads'), 'http://test/uploads')


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, image_storage: LocalImageStorage) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and storage overrides"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: image_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unconfigured_client() -> AsyncGenerator[AsyncClient, None]:
    """Client whose item store has no database behind it"""
    async def no_db():
        yield None

    app.dependency_overrides[get_db] = no_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def category(db_session: AsyncSession) -> Category:
    """Create a test category"""
    category = Category(name=fake.word().title())
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category


@pytest.fixture
def make_item(db_session: AsyncSession, category: Category) -> Callable[..., Awaitable[WorkItem]]:
    """
    Factory for work items. Each call is one minute newer than the last so
    "newest first" ordering is deterministic.
    """
    base = datetime(2024, 1, 1, 12, 0, 0)
    counter = {'n': 0}

    async def _make(title=None, type='bug', status=ItemStatus.DONE.value, category_id=None):
        counter['n'] += 1
        item = WorkItem(
            title=title if title is not None else fake.sentence(nb_words=4),
            type=type,
            status=status,
            category_id=category_id or category.id,
            created_at=base + timedelta(minutes=counter['n']),
        )
        db_session.add(item)
        await db_session.commit()
        await db_session.refresh(item)
        return item

    return _make
