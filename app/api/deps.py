from fastapi import Request

from app.services.student.student import StudentDAO


def get_student_dao(request: Request) -> StudentDAO:
    """
    Dependency returning the application's persistence gateway.
    The gateway manages its own sessions, so nothing is closed here.
    """
    return request.app.state.student_dao
