"""
HTML front end for students.

One URL, ``/student``, with the ``action`` parameter choosing what happens:

    GET  list (default) | new | edit&id= | delete&id=
    POST insert | update

Reads render a template. Writes always answer with a 302 back to the list
(Post/Redirect/Get), carrying ``message`` or ``error`` in the query string.
"""

import logging
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from app.api.deps import get_student_dao
from app.core.exceptions import BadRequestException, BaseAPIException
from app.core.templates import templates
from app.schemas.student import MAX_STUDENT_ID, StudentCreate, StudentUpdate
from app.services.student.student import StudentDAO

logger = logging.getLogger(__name__)

router = APIRouter()

STUDENT_PATH = "/student"


class StudentAction(str, Enum):
    LIST = "list"
    NEW = "new"
    EDIT = "edit"
    DELETE = "delete"
    INSERT = "insert"
    UPDATE = "update"


GET_ACTIONS: FrozenSet[StudentAction] = frozenset(
    {StudentAction.LIST, StudentAction.NEW, StudentAction.EDIT, StudentAction.DELETE}
)
POST_ACTIONS: FrozenSet[StudentAction] = frozenset({StudentAction.INSERT, StudentAction.UPDATE})


# ============= HELPERS =============

def parse_action(
    raw: Optional[str],
    allowed: FrozenSet[StudentAction],
    default: Optional[StudentAction] = None,
) -> StudentAction:
    if not raw:
        if default is None:
            raise BadRequestException("Missing action")
        return default
    try:
        action = StudentAction(raw)
    except ValueError:
        raise BadRequestException(f"Unknown action: {raw}", details={"action": raw})
    if action not in allowed:
        raise BadRequestException(
            f"Action '{raw}' is not allowed with this method",
            details={"action": raw, "allowed": sorted(a.value for a in allowed)},
        )
    return action


def parse_id(raw: Optional[str]) -> int:
    try:
        student_id = int(raw)
    except (TypeError, ValueError):
        raise BadRequestException("A numeric student id is required", details={"id": raw})
    if not 1 <= student_id <= MAX_STUDENT_ID:
        raise BadRequestException("Student id out of range", details={"id": raw})
    return student_id


def list_url(message: Optional[str] = None, error: Optional[str] = None) -> str:
    params = {"action": StudentAction.LIST.value}
    if message:
        params["message"] = message
    if error:
        params["error"] = error
    return f"{STUDENT_PATH}?{urlencode(params)}"


def redirect_to_list(message: Optional[str] = None, error: Optional[str] = None) -> RedirectResponse:
    return RedirectResponse(list_url(message, error), status_code=302)


def _invalid_data_error(exc: ValidationError) -> str:
    fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
    return f"Invalid student data: {', '.join(fields)}"


# ============= GET HANDLERS =============

def show_list(request: Request, dao: StudentDAO, message: Optional[str], error: Optional[str]):
    students = dao.list_all()
    return templates.TemplateResponse(
        request=request,
        name="student_list.html",
        context={"students": students, "message": message, "error": error},
    )


def show_new_form(request: Request):
    return templates.TemplateResponse(
        request=request,
        name="student_form.html",
        context={"student": None},
    )


def show_edit_form(request: Request, dao: StudentDAO, raw_id: Optional[str]):
    student = dao.get_by_id(parse_id(raw_id))
    if student is None:
        return redirect_to_list(error="Student not found")
    return templates.TemplateResponse(
        request=request,
        name="student_form.html",
        context={"student": student},
    )


def delete_student(dao: StudentDAO, raw_id: Optional[str]):
    student_id = parse_id(raw_id)
    try:
        deleted = dao.delete(student_id)
    except BaseAPIException as e:
        return redirect_to_list(error=f"Failed to delete student: {e.message}")
    if deleted:
        return redirect_to_list(message="Student deleted successfully")
    return redirect_to_list(error="Failed to delete student")


# ============= POST HANDLERS =============

def insert_student(dao: StudentDAO, form: Dict[str, Optional[str]]):
    try:
        data = StudentCreate(
            studentCode=form["studentCode"] or "",
            fullName=form["fullName"] or "",
            email=form["email"] or "",
            major=form["major"],
        )
    except ValidationError as e:
        return redirect_to_list(error=_invalid_data_error(e))

    try:
        dao.insert(data)
    except BaseAPIException as e:
        return redirect_to_list(error=f"Failed to add student: {e.message}")
    return redirect_to_list(message="Student added successfully")


def update_student(dao: StudentDAO, form: Dict[str, Optional[str]]):
    student_id = parse_id(form["id"])
    try:
        data = StudentUpdate(
            fullName=form["fullName"] or "",
            email=form["email"] or "",
            major=form["major"],
        )
    except ValidationError as e:
        return redirect_to_list(error=_invalid_data_error(e))

    try:
        updated = dao.update(student_id, data)
    except BaseAPIException as e:
        return redirect_to_list(error=f"Failed to update student: {e.message}")
    if updated:
        return redirect_to_list(message="Student updated successfully")
    return redirect_to_list(error="Failed to update student")


# ============= ENDPOINTS =============

@router.get("/", include_in_schema=False)
def root():
    return RedirectResponse(STUDENT_PATH, status_code=302)


@router.get(STUDENT_PATH, name="student_get")
def student_get(
    request: Request,
    action: Optional[str] = None,
    id: Optional[str] = None,
    message: Optional[str] = None,
    error: Optional[str] = None,
    dao: StudentDAO = Depends(get_student_dao),
):
    act = parse_action(action, GET_ACTIONS, default=StudentAction.LIST)
    logger.debug(f"GET {STUDENT_PATH} action={act.value}")

    handlers: Dict[StudentAction, Callable] = {
        StudentAction.LIST: lambda: show_list(request, dao, message, error),
        StudentAction.NEW: lambda: show_new_form(request),
        StudentAction.EDIT: lambda: show_edit_form(request, dao, id),
        StudentAction.DELETE: lambda: delete_student(dao, id),
    }
    return handlers[act]()


@router.post(STUDENT_PATH, name="student_post")
def student_post(
    action: Optional[str] = Form(None),
    id: Optional[str] = Form(None),
    studentCode: Optional[str] = Form(None),
    fullName: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    major: Optional[str] = Form(None),
    dao: StudentDAO = Depends(get_student_dao),
):
    act = parse_action(action, POST_ACTIONS)
    logger.debug(f"POST {STUDENT_PATH} action={act.value}")

    form = {
        "id": id,
        "studentCode": studentCode,
        "fullName": fullName,
        "email": email,
        "major": major,
    }
    if act is StudentAction.INSERT:
        return insert_student(dao, form)
    return update_student(dao, form)
