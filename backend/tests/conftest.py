import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from blog.database import Base, get_session_factory
from blog.main import app
from blog.services.category_service import CategoryService
from blog.services.post_service import PostService
from blog.services.transaction import Transactor

TEST_DB_URL = "sqlite:///./test_blog.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_session_factory():
    return TestingSession


app.dependency_overrides[get_session_factory] = override_get_session_factory


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def transactor():
    return Transactor(TestingSession)


@pytest.fixture
def post_service(transactor):
    return PostService(transactor)


@pytest.fixture
def category_service(transactor):
    return CategoryService(transactor)


@pytest.fixture
def seed_categories(category_service):
    return [category_service.create(name) for name in ("Go", "Python", "Databases")]


def create_post(client, title: str = "T", content: str = "C") -> dict:
    resp = client.post("/api/posts", json={"title": title, "content": content})
    assert resp.status_code == 201, resp.text
    return resp.json()
