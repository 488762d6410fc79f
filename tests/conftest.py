"""
Pytest fixtures and configuration for portfolio tests
"""
import copy
import io

import pytest
from werkzeug.datastructures import FileStorage

from portfolio.constants import DEFAULT_SETTINGS


@pytest.fixture
def test_settings(tmp_path):
    """Settings with an in-memory database and a temporary upload directory"""
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    settings["database"]["url"] = "sqlite://"
    settings["uploads"]["path"] = str(tmp_path / "uploads")
    settings["server"]["deploy_mode"] = "standalone"
    return settings


@pytest.fixture
def app(test_settings):
    """Application bound to a fresh in-memory database"""
    from portfolio.app import create_app
    from portfolio.db import db

    _app = create_app(config={"TESTING": True}, settings=test_settings)
    with _app.app_context():
        yield _app
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    from portfolio.db import db
    return db.session


@pytest.fixture
def services(app):
    from portfolio.services import get_services
    return get_services()


@pytest.fixture
def upload_dir(test_settings):
    return test_settings["uploads"]["path"]


@pytest.fixture
def make_file():
    """Build a werkzeug FileStorage like the ones found in request.files"""
    def _make(filename="image.png", data=b"\x89PNG\r\n\x1a\nfake", content_type="image/png"):
        return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)
    return _make


@pytest.fixture
def sample_project():
    return {
        "title": "Portfolio API",
        "description": "REST backend for this site",
        "code_url": "https://github.com/example/portfolio",
        "display_order": 1,
        "tags": ["python", "flask"],
    }


@pytest.fixture
def sample_post():
    return {
        "title": "Hello",
        "slug": "hello-world",
        "content": "First post",
        "status": "published",
        "publish_date": "2026-01-10T09:00:00Z",
        "tags": ["go", "web"],
    }
