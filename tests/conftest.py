# tests/conftest.py

import pytest

from app import create_app
from config.config import TestConfig
from extensions import db
from services import mark_service
from utils.seed_data import seed_students

STUDENTS = [
    {
        "parent_id": pid,
        "name": f"Student {pid}",
        "email": f"student{pid}@example.com",
        "age": 14 + pid % 4,
    }
    for pid in range(1, 14)
]


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        seed_students(STUDENTS)
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def twelve_students_with_marks(app):
    for pid in range(1, 13):
        marks = [{"subject": "Maths", "score": 50 + pid}]
        if pid % 2 == 0:
            marks.append({"subject": "English", "score": 60})
        mark_service.create_batch(pid, marks)
