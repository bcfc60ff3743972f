# models/subjects.py
import enum


class Subject(enum.Enum):
    MATHS = "Maths"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    ENGLISH = "English"
    BIOLOGY = "Biology"

    @classmethod
    def from_input(cls, value):
        """Match a submitted subject name, ignoring surrounding spaces and case.

        Returns None when the name is not one of the fixed subjects.
        """
        if not isinstance(value, str):
            return None
        folded = value.strip().casefold()
        for subject in cls:
            if subject.value.casefold() == folded:
                return subject
        return None

    @classmethod
    def display_list(cls):
        names = [s.value for s in cls]
        return ", ".join(names[:-1]) + ", and " + names[-1]
