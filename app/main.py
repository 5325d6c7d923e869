from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings
from app.core.handlers import register_exception_handlers
from app.core.logging import logger
from app.api.deps import get_student_dao
from app.api.v1.router import api_router
from app.services.student.student import StudentDAO
from app.web import student as student_web


def create_app(app_settings: Settings = settings, dao: Optional[StudentDAO] = None) -> FastAPI:
    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.APP_VERSION,
        debug=app_settings.DEBUG
    )

    app.state.settings = app_settings
    app.state.student_dao = dao or StudentDAO(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # HTML pages: /student?action=...
    app.include_router(student_web.router)
    # JSON API
    app.include_router(api_router, prefix=app_settings.API_V1_PREFIX)

    @app.get("/health")
    def health(dao: StudentDAO = Depends(get_student_dao)):
        """
        Health check endpoint
        """
        database_ok = dao.ping()
        return {
            "status": "ok" if database_ok else "degraded",
            "database": database_ok,
            "version": app_settings.APP_VERSION,
        }

    logger.info(f"{app_settings.PROJECT_NAME} ready, database: {app_settings.masked_database_url()}")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
