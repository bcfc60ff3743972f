# tests/test_mark_failures.py

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from models.mark import Mark
from models.subjects import Subject
from services import mark_service, student_service
from services.errors import Conflict, Internal

ORIGINAL_FLUSH = Session.flush


def locked_db_error():
    return OperationalError("INSERT INTO marks", {}, Exception("database is locked"))


def fail_on_insert(self, objects=None):
    if self.new:
        raise locked_db_error()
    return ORIGINAL_FLUSH(self, objects)


def fail_commit(self):
    raise locked_db_error()


def raise_locked(*args, **kwargs):
    raise locked_db_error()


def scores_for(parent_id):
    return {
        m.subject_key: m.score
        for m in Mark.query.filter_by(parent_id=parent_id).all()
    }


# ---------------------------------------------------------
# lost check-then-insert race
# ---------------------------------------------------------
def test_unique_violation_becomes_conflict(app, monkeypatch):
    mark_service.create_batch(3, [{"subject": "Maths", "score": 80}])

    real_lookup = mark_service.existing_subject_keys
    calls = []

    # The first check misses the row another writer committed
    def stale_then_real(parent_id):
        calls.append(parent_id)
        return set() if len(calls) == 1 else real_lookup(parent_id)

    monkeypatch.setattr(mark_service, "existing_subject_keys", stale_then_real)

    with pytest.raises(Conflict) as excinfo:
        mark_service.create_batch(3, [
            {"subject": "Maths", "score": 90},
            {"subject": "Physics", "score": 70},
        ])

    assert excinfo.value.message == "Marks already exist for subjects: Maths"
    assert scores_for(3) == {Subject.MATHS: 80}


# ---------------------------------------------------------
# storage failures
# ---------------------------------------------------------
def test_create_storage_failure(app, monkeypatch):
    monkeypatch.setattr(Session, "flush", fail_on_insert)

    with pytest.raises(Internal, match="^Failed to create marks: database is locked$"):
        mark_service.create_batch(1, [{"subject": "Maths", "score": 80}])

    monkeypatch.undo()
    assert scores_for(1) == {}


def test_replace_storage_failure_keeps_old_rows(app, monkeypatch):
    mark_service.create_batch(2, [{"subject": "Maths", "score": 80}])
    monkeypatch.setattr(Session, "flush", fail_on_insert)

    with pytest.raises(Internal, match="^Failed to update marks: "):
        mark_service.replace_by_subjects(2, [{"subject": "Maths", "score": 95}])

    monkeypatch.undo()
    assert scores_for(2) == {Subject.MATHS: 80}


def test_delete_storage_failure(app, monkeypatch):
    mark_service.create_batch(4, [{"subject": "Maths", "score": 80}])
    monkeypatch.setattr(Session, "commit", fail_commit)

    with pytest.raises(Internal, match="^Failed to delete marks: "):
        mark_service.delete_all(4)

    monkeypatch.undo()
    assert scores_for(4) == {Subject.MATHS: 80}


def test_get_by_student_storage_failure(app, monkeypatch):
    mark_service.create_batch(5, [{"subject": "Maths", "score": 80}])
    monkeypatch.setattr(student_service, "display_name", raise_locked)

    with pytest.raises(Internal, match="^Failed to retrieve marks: "):
        mark_service.get_by_student(5)


def test_list_paged_storage_failure(app, monkeypatch):
    mark_service.create_batch(6, [{"subject": "Maths", "score": 80}])
    monkeypatch.setattr(student_service, "display_names", raise_locked)

    with pytest.raises(Internal, match="^Failed to retrieve marks: "):
        mark_service.list_paged(1, 5)


def test_storage_failure_is_json_500(client, monkeypatch):
    client.post("/api/students/mark/add/7", json=[{"subject": "Maths", "score": 80}])
    monkeypatch.setattr(Session, "commit", fail_commit)

    response = client.delete("/api/students/mark/delete/7")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to delete marks: database is locked"}
