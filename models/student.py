from extensions import db

class Student(db.Model):
    __tablename__ = "students"

    student_id = db.Column(db.Integer, primary_key=True)
    parent_id = db.Column(db.Integer, unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True)
    age = db.Column(db.Integer, nullable=True)

    created_at = db.Column(db.DateTime, server_default=db.func.now())

    marks = db.relationship("Mark", backref="student", lazy=True)

    def to_dict(self):
        return {
            "parentId": self.parent_id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
        }

    def __repr__(self):
        return f"<Student {self.parent_id}>"
