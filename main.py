import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config.settings import Settings
from app.database import Base, engine
from app.routers import auth, user, project, task, notifications
from app.utils.errors import Conflict, Forbidden, NotFound, ServiceError, Unauthenticated

logging.basicConfig(level=Settings.LOGGING["level"], format=Settings.LOGGING["format"])
logger = logging.getLogger(__name__)

# Failure taxonomy -> HTTP status
STATUS_CODES = {
    Unauthenticated: 401,
    Forbidden: 403,
    NotFound: 404,
    Conflict: 409,
}


def create_app() -> FastAPI:
    app = FastAPI(title="Task Tracker API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Settings.CORS["origins"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        status_code = STATUS_CODES.get(type(exc), 400)
        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return JSONResponse(status_code=status_code, content={"detail": exc.detail}, headers=headers)

    @app.on_event("startup")
    def create_tables():
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ready")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Route registration
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, prefix="/users", tags=["Users"])
    app.include_router(project.router, prefix="/projects", tags=["Projects"])
    app.include_router(task.router, tags=["Tasks"])
    app.include_router(notifications.router, tags=["Notifications"])

    return app


app = create_app()
