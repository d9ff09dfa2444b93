"""
KGHS Alumni Network - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment before the app reads its settings
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_alumni.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''

from alumni.main import app
from alumni.core.database import Base, get_db
from alumni.core.security import get_password_hash, create_access_token
from alumni.models.user import User, UserRole
from alumni.services.storage_service import get_storage_service
from alumni.services.payment_service import get_payment_gateway
from alumni.services.email_service import get_email_service
from tests.mocks.fake_services import FakeStorageService, FakePaymentGateway, FakeEmailService

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_alumni.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


def make_email() -> str:
    return f"{fake.unique.user_name()}@kghs-alumni.org"


@pytest.fixture(scope='function')
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
def storage() -> FakeStorageService:
    return FakeStorageService()


@pytest.fixture
def gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def mailer() -> FakeEmailService:
    return FakeEmailService()


@pytest.fixture
async def client(
    db_session: AsyncSession,
    storage: FakeStorageService,
    gateway: FakePaymentGateway,
    mailer: FakeEmailService,
) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the database and external adapters overridden"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_email_service] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def create_user(
    db_session: AsyncSession,
    is_approved: bool = True,
    role: UserRole = UserRole.ALUMNI,
    **fields
) -> User:
    user = User(
        email=fields.pop('email', None) or make_email(),
        hashed_password=get_password_hash(fields.pop('password', TEST_PASSWORD)),
        name=fields.pop('name', None) or fake.name(),
        graduation_year=fields.pop('graduation_year', 2010),
        role=role,
        is_approved=is_approved,
        **fields
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def headers_for(user: User) -> dict:
    token = create_access_token({'sub': str(user.id), 'email': user.email})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """An approved alumni account"""
    return await create_user(db_session, location='Lagos, Nigeria')


@pytest.fixture
async def pending_user(db_session: AsyncSession) -> User:
    """An account still waiting for approval"""
    return await create_user(db_session, is_approved=False)


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, role=UserRole.ADMIN)


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    return headers_for(test_user)


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    return headers_for(admin_user)
