import logging

from flask import Blueprint, request, jsonify, current_app

from services import mark_service
from utils.payload import parse_parent_id, normalize_marks, parse_positive_int

logger = logging.getLogger(__name__)

mark_bp = Blueprint("marks", __name__, url_prefix="/api/students/mark")


def marks_payload(parent_id, name, marks):
    # First element carries the student, the rest are the marks
    return [{"parentId": parent_id, "name": name}, *marks]


# =========================================================
# ADD MARKS
# =========================================================
@mark_bp.route("/add/<parent_id>", methods=["POST"])
def create_marks(parent_id):
    parent_id = parse_parent_id(parent_id)
    body = request.get_json(silent=True)
    logger.debug("create_marks parentId=%s payload=%s", parent_id, body)

    marks = normalize_marks(body)
    name, created = mark_service.create_batch(parent_id, marks)

    return jsonify({
        "message": "Marks created successfully",
        "data": marks_payload(parent_id, name, created)
    }), 201


# =========================================================
# VIEW MARKS FOR ONE STUDENT
# =========================================================
@mark_bp.route("/view/<parent_id>", methods=["GET"])
def get_marks(parent_id):
    parent_id = parse_parent_id(parent_id)
    logger.debug("get_marks parentId=%s", parent_id)

    name, marks = mark_service.get_by_student(parent_id)

    return jsonify({
        "message": "Marks retrieved successfully",
        "data": marks_payload(parent_id, name, marks)
    })


# =========================================================
# UPDATE MARKS
# =========================================================
@mark_bp.route("/update/<parent_id>", methods=["PUT"])
def update_marks(parent_id):
    parent_id = parse_parent_id(parent_id)
    body = request.get_json(silent=True)
    logger.debug("update_marks parentId=%s payload=%s", parent_id, body)

    marks = normalize_marks(body)
    name, updated = mark_service.replace_by_subjects(parent_id, marks)

    return jsonify({
        "message": "Marks updated successfully",
        "data": marks_payload(parent_id, name, updated)
    })


# =========================================================
# DELETE ALL MARKS OF A STUDENT
# =========================================================
@mark_bp.route("/delete/<parent_id>", methods=["DELETE"])
def delete_marks(parent_id):
    parent_id = parse_parent_id(parent_id)
    logger.debug("delete_marks parentId=%s", parent_id)

    deleted_count = mark_service.delete_all(parent_id)

    return jsonify({"message": f"Successfully deleted {deleted_count} mark(s)"})


# =========================================================
# PAGED LIST OF STUDENTS WITH MARKS
# =========================================================
@mark_bp.route("/viewallwithmarks", methods=["GET"])
def list_students_with_marks():
    page = parse_positive_int(request.args.get("page"), current_app.config["DEFAULT_PAGE"])
    limit = parse_positive_int(request.args.get("limit"), current_app.config["DEFAULT_LIMIT"])

    data, meta = mark_service.list_paged(page, limit)

    return jsonify({
        "message": "All marks retrieved successfully",
        "data": data,
        "meta": meta
    })
