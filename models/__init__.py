from .subjects import Subject
from .student import Student
from .mark import Mark
__all__ = ["Subject", "Student", "Mark"]
