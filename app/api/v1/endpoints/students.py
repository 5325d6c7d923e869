from fastapi import APIRouter, Depends, Path, Response, status
from typing import Annotated, List
from app.api.deps import get_student_dao
from app.core.exceptions import StudentNotFoundError
from app.services.student.student import StudentDAO
from app.schemas.student import MAX_STUDENT_ID, Student, StudentCreate, StudentUpdate

router = APIRouter()

StudentId = Annotated[int, Path(ge=1, le=MAX_STUDENT_ID)]


@router.get("/", response_model=List[Student])
def get_students(dao: StudentDAO = Depends(get_student_dao)):
    """
    List all students, highest id first
    """
    return dao.list_all()


@router.get("/{student_id}", response_model=Student)
def get_student(
    student_id: StudentId,
    dao: StudentDAO = Depends(get_student_dao)
):
    student = dao.get_by_id(student_id)
    if student is None:
        raise StudentNotFoundError(student_id)
    return student


@router.post("/", response_model=Student, status_code=status.HTTP_201_CREATED)
def create_student(
    student: StudentCreate,
    dao: StudentDAO = Depends(get_student_dao)
):
    """
    Create a student

    - **studentCode**: business identifier, cannot be changed later
    - **fullName**: required
    - **email**: required, must be a valid address
    - **major**: optional

    The response carries the id and createdAt assigned by the database.
    """
    return dao.insert(student)


@router.put("/{student_id}", response_model=Student)
def update_student(
    student_id: StudentId,
    student: StudentUpdate,
    dao: StudentDAO = Depends(get_student_dao)
):
    """
    Update fullName, email and major. studentCode is kept as is.
    """
    if not dao.update(student_id, student):
        raise StudentNotFoundError(student_id)
    return dao.get_by_id(student_id)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(
    student_id: StudentId,
    dao: StudentDAO = Depends(get_student_dao)
):
    if not dao.delete(student_id):
        raise StudentNotFoundError(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
