import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings
from app.core.database import create_db_engine, create_session_factory
from app.core.exceptions import StorageError, StorageUnavailableError
from app.models.student import Student as StudentModel
from app.schemas.student import Student, StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

# Failures that mean "could not talk to the database at all"
_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError)


class StudentDAO:
    """
    Persistence gateway for the ``students`` table.

    Holds no per-request state: every method opens its own session, runs a
    single statement and closes the session again, whatever happens. Whether
    that means a fresh connection each time or a pooled one is decided by the
    engine (see ``DB_POOL_ENABLED``).

    "Nothing there" is a normal return value (``None``, ``False`` or ``[]``).
    A database that cannot be reached raises ``StorageUnavailableError``; any
    other database failure raises ``StorageError``.
    """

    def __init__(self, settings: Optional[Settings] = None, session_factory: Optional[sessionmaker] = None):
        if session_factory is None:
            if settings is None:
                raise ValueError("StudentDAO needs settings or a session factory")
            session_factory = create_session_factory(create_db_engine(settings))
        self._session_factory = session_factory

    @property
    def engine(self):
        return self._session_factory.kw["bind"]

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except _UNAVAILABLE_ERRORS as e:
            logger.error(f"Database unavailable during {operation}: {e}", exc_info=True)
            raise StorageUnavailableError(
                details={"operation": operation, "error": str(getattr(e, "orig", e))}
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error during {operation}: {e}", exc_info=True)
            db.rollback()
            raise StorageError(
                details={"operation": operation, "error": str(getattr(e, "orig", e))}
            ) from e
        finally:
            db.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> List[Student]:
        """All students, newest id first."""
        with self._session("list_all") as db:
            rows = db.query(StudentModel).order_by(StudentModel.id.desc()).all()
            return [Student.model_validate(row) for row in rows]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with self._session("get_by_id") as db:
            row = db.query(StudentModel).filter(StudentModel.id == student_id).first()
            if row is None:
                return None
            return Student.model_validate(row)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def insert(self, student: StudentCreate) -> Student:
        """
        Store a new student and return it as stored, including the
        id and created_at assigned by the database.
        """
        with self._session("insert") as db:
            row = StudentModel(
                student_code=student.studentCode,
                full_name=student.fullName,
                email=student.email,
                major=student.major,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            logger.info(f"Inserted student id={row.id} code={row.student_code}")
            return Student.model_validate(row)

    def update(self, student_id: int, student: StudentUpdate) -> bool:
        """
        Overwrite name, email and major of one row. student_code is never
        touched. Returns False when no row has this id.
        """
        with self._session("update") as db:
            affected = (
                db.query(StudentModel)
                .filter(StudentModel.id == student_id)
                .update(
                    {
                        StudentModel.full_name: student.fullName,
                        StudentModel.email: student.email,
                        StudentModel.major: student.major,
                    },
                    synchronize_session=False,
                )
            )
            db.commit()
            logger.info(f"Updated student id={student_id}: {affected} row(s)")
            return affected > 0

    def delete(self, student_id: int) -> bool:
        with self._session("delete") as db:
            affected = (
                db.query(StudentModel)
                .filter(StudentModel.id == student_id)
                .delete(synchronize_session=False)
            )
            db.commit()
            logger.info(f"Deleted student id={student_id}: {affected} row(s)")
            return affected > 0

    def ping(self) -> bool:
        """True when a trivial query succeeds."""
        try:
            with self._session("ping") as db:
                db.execute(text("SELECT 1"))
            return True
        except (StorageUnavailableError, StorageError):
            return False
