# blog_api/conftest.py
"""
Shared pytest fixtures.

Usage: python -m pytest -v
"""

import io

import pytest

from blog_api import create_app
from blog_api.api.posts.services import PostService
from blog_api.api.users.services import UserService
from blog_api.services.storage_service import StorageService
from blog_api.testing import MemoryCollection


@pytest.fixture
def users():
    return MemoryCollection()


@pytest.fixture
def posts():
    return MemoryCollection()


@pytest.fixture
def upload_folder(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_folder):
    return StorageService(str(upload_folder))


@pytest.fixture
def post_service(posts, users, storage):
    return PostService(posts=posts, users=users, storage_service=storage)


@pytest.fixture
def user_service(users, storage):
    return UserService(users=users, storage_service=storage,
                       token_issuer=lambda user_id, name: f"token-for-{user_id}")


@pytest.fixture
def make_user(user_service):
    """Register a user and return its id."""
    def _make_user(name="Alice", email="alice@example.com", password="secret1"):
        return user_service.register(name, email, password, password)['user_id']
    return _make_user


@pytest.fixture
def app(users, posts, upload_folder):
    app = create_app(
        'testing',
        collections={'users': users, 'posts': posts},
        test_config={'UPLOAD_FOLDER': str(upload_folder)},
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Register (if needed) and log in through the API; returns (user_id, auth headers)."""
    def _login(name="Alice", email="alice@example.com", password="secret1"):
        client.post('/api/users/register', json={
            "name": name, "email": email, "password": password, "password2": password,
        })
        response = client.post('/api/users/login', json={"email": email, "password": password})
        body = response.get_json()
        return body['id'], {"Authorization": f"Bearer {body['token']}"}
    return _login


@pytest.fixture
def image_upload():
    """Multipart file tuple for the Flask test client."""
    def _image_upload(size: int = 1024, filename: str = "cover.png"):
        return (io.BytesIO(b"\x89" * size), filename)
    return _image_upload
