import logging

from app.core.config import settings
from app.schemas.student import StudentCreate
from app.services.student.student import StudentDAO

# Setup logging to see output
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    StudentCreate(studentCode="S001", fullName="Nguyen Van A", email="vana@example.com", major="Computer Science"),
    StudentCreate(studentCode="S002", fullName="Tran Thi B", email="thib@example.com", major="Information Technology"),
    StudentCreate(studentCode="S003", fullName="Le Van C", email="vanc@example.com", major="Software Engineering"),
]


def seed_data(dao: StudentDAO) -> int:
    """
    Insert the sample students when the table is empty.
    Returns how many rows were inserted.
    """
    if dao.list_all():
        logger.info("Database already contains data. Skipping seed.")
        return 0

    logger.info("Seeding data...")
    for student in SAMPLE_STUDENTS:
        dao.insert(student)

    logger.info("✅ Data seeded successfully!")
    return len(SAMPLE_STUDENTS)


if __name__ == "__main__":
    seed_data(StudentDAO(settings))
