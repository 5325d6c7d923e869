from sqlalchemy import Column, DateTime, Integer, String, func
from app.core.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    # Uniqueness, if any, is a storage-side constraint
    student_code = Column(String(20), nullable=False, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(100))
    major = Column(String(100))
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Student id={self.id} code={self.student_code!r} name={self.full_name!r}>"
