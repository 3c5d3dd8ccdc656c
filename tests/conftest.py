# tests/conftest.py

import pytest

from app import create_app
from app.config import TestingConfig
from app.extensions import db
from app.services.storage import AttachmentStore


@pytest.fixture
def upload_dir(tmp_path):
    d = tmp_path / "uploads"
    d.mkdir()
    return d


@pytest.fixture
def store(upload_dir):
    return AttachmentStore(str(upload_dir), allowed_extensions=["pdf", "doc", "docx"])


@pytest.fixture
def make_upload(upload_dir):
    def _make(name="cv.pdf", content=b"%PDF-1.4 curriculum"):
        path = upload_dir / name
        path.write_bytes(content)
        return str(path)
    return _make


@pytest.fixture
def app(upload_dir):
    config = type("Config", (TestingConfig,), {"UPLOAD_FOLDER": str(upload_dir)})
    app = create_app(config)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
