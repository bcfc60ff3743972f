import logging

from extensions import db
from models.student import Student

logger = logging.getLogger(__name__)

DEMO_STUDENTS = [
    {"parent_id": 1, "name": "Aarav Sharma", "email": "aarav@example.com", "age": 16},
    {"parent_id": 2, "name": "Diya Patel", "email": "diya@example.com", "age": 15},
    {"parent_id": 3, "name": "Kabir Rao", "email": "kabir@example.com", "age": 17},
    {"parent_id": 4, "name": "Meera Nair", "email": "meera@example.com", "age": 16},
    {"parent_id": 5, "name": "Rohan Iyer", "email": "rohan@example.com", "age": 15},
]


def seed_students(students=DEMO_STUDENTS):
    added = 0
    for s in students:
        existing = Student.query.filter(
            (Student.parent_id == s["parent_id"]) |
            (Student.email == s["email"])
        ).first()

        if not existing:
            db.session.add(Student(**s))
            added += 1

    db.session.commit()
    logger.info("Students verified (%d added)", added)
    return added


def run_seed():
    return seed_students()
