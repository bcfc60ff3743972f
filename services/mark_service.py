import logging
import math

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models.mark import Mark
from models.subjects import Subject
from services import student_service
from services.errors import ServiceError, InvalidArgument, NotFound, Conflict, Internal

logger = logging.getLogger(__name__)

MAX_MARKS = len(Subject)
COUNT_ERROR = (
    f"At least 1 and at most {MAX_MARKS} marks are required for "
    f"{Subject.display_list()}"
)


# =========================================================
# VALIDATION HELPERS
# =========================================================
def subject_label(raw):
    if isinstance(raw, str):
        return raw.strip()
    if raw is None:
        return "(missing)"
    return str(raw)


def db_message(exc):
    return str(getattr(exc, "orig", None) or exc)


def validate_subjects(marks):
    """Check the entry count, the subject names and in-request duplicates.

    Every unknown subject is reported, not only the first one.
    Returns the canonical Subject of each entry in request order.
    """
    if not marks or len(marks) > MAX_MARKS:
        raise InvalidArgument(COUNT_ERROR)

    subjects = [Subject.from_input(m.get("subject")) for m in marks]
    invalid = [
        subject_label(m.get("subject"))
        for m, subject in zip(marks, subjects)
        if subject is None
    ]
    if invalid:
        raise InvalidArgument(
            f"Invalid subjects: {', '.join(invalid)}. "
            f"Only {Subject.display_list()} are allowed"
        )

    if len(set(subjects)) != len(subjects):
        raise InvalidArgument("Duplicate subjects are not allowed in the same request")

    return subjects


def validate_scores(marks):
    for mark in marks:
        score = mark.get("score")
        # bool is an int subclass; NaN fails the range comparison
        if (
            isinstance(score, bool)
            or not isinstance(score, (int, float))
            or not 0 <= score <= 100
        ):
            raise InvalidArgument(
                f"Score for {subject_label(mark.get('subject'))} must be between 0 and 100"
            )


def existing_subject_keys(parent_id):
    return {
        key for (key,) in db.session.query(Mark.subject_key)
        .filter(Mark.parent_id == parent_id)
        .all()
    }


def colliding_subjects(parent_id, marks, subjects):
    existing = existing_subject_keys(parent_id)
    return [
        subject_label(mark["subject"])
        for mark, subject in zip(marks, subjects)
        if subject in existing
    ]


def build_rows(parent_id, marks, subjects):
    return [
        Mark(
            subject=mark["subject"].strip(),
            subject_key=subject,
            score=int(mark["score"]),
            parent_id=parent_id
        )
        for mark, subject in zip(marks, subjects)
    ]


# =========================================================
# CREATE
# =========================================================
def create_batch(parent_id, marks):
    """Insert 1-5 new marks for a student in one transaction.

    Returns ``(student_name, created_marks)``.
    """
    try:
        # Row lock on the student serializes concurrent writers for it
        student = student_service.get_student(parent_id, lock=True)
        name = student.name

        subjects = validate_subjects(marks)

        duplicates = colliding_subjects(parent_id, marks, subjects)
        if duplicates:
            raise Conflict(f"Marks already exist for subjects: {', '.join(duplicates)}")

        validate_scores(marks)

        rows = build_rows(parent_id, marks, subjects)
        db.session.add_all(rows)
        db.session.flush()
        created = [row.to_dict() for row in rows]
        db.session.commit()
    except ServiceError:
        db.session.rollback()
        raise
    except IntegrityError as exc:
        # A concurrent request won the race on (parent_id, subject_key)
        db.session.rollback()
        logger.warning("Unique subject violation for parentId %s: %s", parent_id, db_message(exc))
        duplicates = colliding_subjects(parent_id, marks, subjects) or [
            subject_label(m.get("subject")) for m in marks
        ]
        raise Conflict(f"Marks already exist for subjects: {', '.join(duplicates)}") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("create_batch failed for parentId %s", parent_id)
        raise Internal(f"Failed to create marks: {db_message(exc)}") from exc

    logger.info("Created %d mark(s) for parentId %s", len(created), parent_id)
    return name, created


# =========================================================
# UPDATE (replace by subject set)
# =========================================================
def replace_by_subjects(parent_id, marks):
    """Delete the student's marks for the requested subjects, then insert
    the new values. Subjects not named in the request are left alone.

    Returns ``(student_name, new_marks)``.
    """
    try:
        student = student_service.get_student(parent_id, lock=True)
        name = student.name

        subjects = validate_subjects(marks)
        validate_scores(marks)

        Mark.query.filter(
            Mark.parent_id == parent_id,
            Mark.subject_key.in_(subjects)
        ).delete()

        rows = build_rows(parent_id, marks, subjects)
        db.session.add_all(rows)
        db.session.flush()
        updated = [row.to_dict() for row in rows]
        db.session.commit()
    except ServiceError:
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("replace_by_subjects failed for parentId %s", parent_id)
        raise Internal(f"Failed to update marks: {db_message(exc)}") from exc

    logger.info("Replaced %d mark(s) for parentId %s", len(updated), parent_id)
    return name, updated


# =========================================================
# DELETE
# =========================================================
def delete_all(parent_id):
    try:
        student_service.get_student(parent_id)

        deleted_count = Mark.query.filter(
            Mark.parent_id == parent_id
        ).delete()

        if deleted_count == 0:
            raise NotFound("No marks found for this student")

        db.session.commit()
    except ServiceError:
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("delete_all failed for parentId %s", parent_id)
        raise Internal(f"Failed to delete marks: {db_message(exc)}") from exc

    logger.info("Deleted %d mark(s) for parentId %s", deleted_count, parent_id)
    return deleted_count


# =========================================================
# READ
# =========================================================
def get_by_student(parent_id):
    try:
        marks = Mark.query.filter(
            Mark.parent_id == parent_id
        ).order_by(Mark.id.asc()).all()

        if not marks:
            raise NotFound("No marks found for this student")

        name = student_service.display_name(parent_id)
    except SQLAlchemyError as exc:
        logger.exception("get_by_student failed for parentId %s", parent_id)
        raise Internal(f"Failed to retrieve marks: {db_message(exc)}") from exc

    return name, [mark.to_dict() for mark in marks]


def list_paged(page, limit):
    """Page over students that have at least one mark.

    A student counts once however many marks they hold.
    Returns ``(groups, meta)``.
    """
    try:
        total = db.session.query(
            func.count(func.distinct(Mark.parent_id))
        ).scalar() or 0

        parent_ids = [
            pid for (pid,) in db.session.query(Mark.parent_id)
            .group_by(Mark.parent_id)
            .order_by(Mark.parent_id.asc())
            .limit(limit)
            .offset((page - 1) * limit)
            .all()
        ]
        if not parent_ids:
            raise NotFound("No marks found")

        marks = Mark.query.filter(
            Mark.parent_id.in_(parent_ids)
        ).order_by(Mark.parent_id.asc(), Mark.id.asc()).all()
        if not marks:
            raise NotFound("No marks found")

        names = student_service.display_names(parent_ids)
    except SQLAlchemyError as exc:
        logger.exception("list_paged failed for page=%s limit=%s", page, limit)
        raise Internal(f"Failed to retrieve marks: {db_message(exc)}") from exc

    grouped = {}
    for mark in marks:
        group = grouped.setdefault(mark.parent_id, {
            "parentId": mark.parent_id,
            "name": names[mark.parent_id],
            "marks": []
        })
        group["marks"].append({"subject": mark.subject, "score": mark.score})

    meta = {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit)
    }
    return list(grouped.values()), meta
