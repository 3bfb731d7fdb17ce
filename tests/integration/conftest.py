import pytest_asyncio
from cryptography.fernet import Fernet
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.adapter.services.auth_provider import SqlAlchemyAuthProvider
from src.adapter.services.secret_cipher import FernetSecretCipher
from src.api.dependencies import get_secret_cipher
from src.depends import get_session, get_session_factory
from src.domain.organization import Organization
from src.domain.user import User, UserRole


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """File-backed SQLite database, fresh for every test"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'ops_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, session_factory):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    cipher = FernetSecretCipher(Fernet.generate_key())

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_secret_cipher] = lambda: cipher

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def organization(db_session):
    org = Organization(id="org_acme", name="Acme Agency", slug="acme", invoice_prefix="ACME")
    db_session.add(org)
    await db_session.commit()
    return org


@pytest_asyncio.fixture
async def other_organization(db_session):
    org = Organization(id="org_globex", name="Globex", slug="globex")
    db_session.add(org)
    await db_session.commit()
    return org


async def _add_user(db_session, **fields) -> User:
    user = User(**fields)
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def admin_user(db_session, organization):
    return await _add_user(
        db_session, id="user_admin", auth_id="auth_admin", organization_id=organization.id,
        email="admin@acme.test", name="Ada Admin", role=UserRole.ADMIN,
    )


@pytest_asyncio.fixture
async def member_user(db_session, organization):
    return await _add_user(
        db_session, id="user_member", auth_id="auth_member", organization_id=organization.id,
        email="member@acme.test", name="Mo Member", role=UserRole.MEMBER,
    )


@pytest_asyncio.fixture
async def outsider_user(db_session, other_organization):
    return await _add_user(
        db_session, id="user_globex", auth_id="auth_globex", organization_id=other_organization.id,
        email="admin@globex.test", name="Gil Globex", role=UserRole.ADMIN,
    )


@pytest_asyncio.fixture
async def super_admin_user(db_session):
    return await _add_user(
        db_session, id="user_root", auth_id="auth_root", organization_id=None,
        email="root@ops.test", name="Root", role=UserRole.ADMIN, is_super_admin=True,
    )


@pytest_asyncio.fixture
async def auth_headers(db_session):
    """Issue a session for a user and return the Authorization header"""

    async def _issue(user: User) -> dict:
        token = await SqlAlchemyAuthProvider(db_session).issue_session(user.auth_id, user.organization_id)
        await db_session.commit()
        return {"Authorization": f"Bearer {token}"}

    return _issue
