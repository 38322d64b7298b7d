import pytest
from fastapi.testclient import TestClient

from propvest.core.config import Settings
from propvest.main import create_app
from propvest.storage import DatabaseStorage, MemStorage
from tests.helpers import login, make_user


@pytest.fixture(params=["memory", "database"])
def storage(request):
    if request.param == "memory":
        yield MemStorage()
        return

    store = DatabaseStorage("sqlite://")
    yield store
    store.engine.dispose()


@pytest.fixture
def seeded_storage(storage):
    storage.initialize_properties()
    return storage


@pytest.fixture
def settings():
    return Settings(SEED_PROPERTIES=True, SEED_DEMO_USERS=False, LOG_LEVEL="WARNING")


@pytest.fixture
def app(settings, storage):
    return create_app(settings=settings, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(storage):
    return make_user(storage)


@pytest.fixture
def admin(storage):
    return make_user(storage, username="admin", role="admin", full_name="System Admin")


@pytest.fixture
def user_client(client, user):
    login(client, user.username)
    return client


@pytest.fixture
def admin_client(client, admin):
    login(client, admin.username)
    return client
