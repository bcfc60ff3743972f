from extensions import db
from models.subjects import Subject


class Mark(db.Model):
    __tablename__ = "marks"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Trimmed as submitted; subject_key holds the canonical subject
    subject = db.Column(db.String(50), nullable=False)
    subject_key = db.Column(
        db.Enum(Subject, name="mark_subject"),
        nullable=False
    )

    score = db.Column(db.Integer, nullable=False)

    parent_id = db.Column(
        db.Integer,
        db.ForeignKey("students.parent_id"),
        nullable=False
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    __table_args__ = (
        db.UniqueConstraint("parent_id", "subject_key", name="unique_student_subject"),
        db.CheckConstraint("score >= 0 AND score <= 100", name="score_range"),
        # ids are never reused after delete-then-insert
        {"sqlite_autoincrement": True},
    )

    def to_dict(self):
        return {
            "id": self.id,
            "subject": self.subject,
            "score": self.score,
        }

    def __repr__(self):
        return f"<Mark {self.subject}={self.score} student={self.parent_id}>"
