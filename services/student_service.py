from models.student import Student
from services.errors import NotFound

PLACEHOLDER_NAME = "N/A"


def get_student(parent_id: int, lock: bool = False):
    query = Student.query.filter_by(parent_id=parent_id)
    if lock:
        query = query.with_for_update()

    student = query.first()
    if not student:
        raise NotFound("Student not found")
    return student


def display_name(parent_id: int) -> str:
    # Optional enrichment: a missing student only costs the name
    student = Student.query.filter_by(parent_id=parent_id).first()
    return student.name if student else PLACEHOLDER_NAME


def display_names(parent_ids) -> dict:
    rows = Student.query.with_entities(Student.parent_id, Student.name).filter(
        Student.parent_id.in_(parent_ids)
    ).all()
    names = {pid: name for pid, name in rows}
    return {pid: names.get(pid, PLACEHOLDER_NAME) for pid in parent_ids}
