from flask import Blueprint, jsonify

from services import student_service
from utils.payload import parse_parent_id

student_bp = Blueprint("students", __name__, url_prefix="/api/students")


@student_bp.route("/view/<parent_id>", methods=["GET"])
def get_student(parent_id):
    student = student_service.get_student(parse_parent_id(parent_id))
    return jsonify({
        "message": "Student retrieved successfully",
        "data": student.to_dict()
    })
