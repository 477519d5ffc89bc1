from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.local_storage import LocalStorage
from src.adapter.services.memory_cache_store import MemoryCacheStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.api.utils.jwt import generate_jwt
from src.app.services.access_cache import AccessCache
from src.app.services.notifier import INotifier
from src.depends import get_access_cache, get_notifier, get_storage, get_unit_of_work


class RecordingNotifier(INotifier):
    """Keeps every notification in memory instead of sending it"""

    def __init__(self):
        self.sent = []

    async def send_invitation(self, email, token, document_name):
        self.sent.append(("invitation", email, token))

    async def send_access_granted(self, email, document_name, role):
        self.sent.append(("access_granted", email, role))

    async def send_role_changed(self, email, document_name, role):
        self.sent.append(("role_changed", email, role))

    async def send_role_removed(self, email, document_name):
        self.sent.append(("role_removed", email, None))

    def of_kind(self, kind):
        return [entry for entry in self.sent if entry[0] == kind]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def cache():
    return AccessCache(MemoryCacheStore(key_prefix="it"))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "uploads"))


@pytest_asyncio.fixture
async def client(db_session, cache, notifier, storage):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_access_cache] = lambda: cache
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth():
    """Returns Authorization headers for an email; one stable identity per email"""
    ids = {}

    def headers_for(email: str, name: str = ""):
        user_id = ids.setdefault(email, uuid4())
        token = generate_jwt(user_id, email, name or email.split("@")[0].title())
        return {"Authorization": f"Bearer {token}"}

    return headers_for


@pytest.fixture
def upload(client, auth):
    """Uploads a document as the given owner and returns its id"""

    async def upload_as(owner_email: str, name: str = "report.pdf", content: bytes = b"%PDF-1.4 test"):
        response = await client.post(
            "/documents",
            files={"file": (name, content, "application/pdf")},
            headers=auth(owner_email),
        )
        assert response.status_code == 201
        return response.json()["id"]

    return upload_as
