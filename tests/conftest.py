import mongomock
import pytest
from fastapi.testclient import TestClient

from database.mongo_adapter import MongoAdapter
from files_manager.adapters.cache import RedisCache
from files_manager.config.settings import Settings
from files_manager.main import create_app
from tests.consts import OTHER_TOKEN, TEST_DB_NAME, TEST_TOKEN
from tests.fixtures.fakes import FakeRedis
from tests.fixtures.file_fixtures import create_user, login


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis) -> RedisCache:
    return RedisCache(redis_client=fake_redis)


@pytest.fixture
def mongo_adapter() -> MongoAdapter:
    return MongoAdapter(client=mongomock.MongoClient(), db_name=TEST_DB_NAME)


@pytest.fixture
def storage_dir(tmp_path):
    # Not created up front: uploads create it on demand
    return tmp_path / "files_manager"


@pytest.fixture
def settings(storage_dir) -> Settings:
    return Settings(folder_path=str(storage_dir), db_database=TEST_DB_NAME)


@pytest.fixture
def app(settings, mongo_adapter, cache):
    return create_app(settings, mongo=mongo_adapter, cache=cache)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def user_id(mongo_adapter, cache):
    user_id = create_user(mongo_adapter, "bob@example.com")
    login(cache, TEST_TOKEN, user_id)
    return user_id


@pytest.fixture
def other_user_id(mongo_adapter, cache):
    user_id = create_user(mongo_adapter, "alice@example.com")
    login(cache, OTHER_TOKEN, user_id)
    return user_id


@pytest.fixture
def auth_headers(user_id):
    return {"X-Token": TEST_TOKEN}


@pytest.fixture
def other_auth_headers(other_user_id):
    return {"X-Token": OTHER_TOKEN}
