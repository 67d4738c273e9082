from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import SubmissionRejected, TaskNotFoundError
from .logging_setup import setup_logging
from .routers import filters as filters_router
from .routers import tasks as tasks_router
from .service import TodoService
from .settings import Settings, get_settings
from .storage import get_storage

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "tasks",
        "description": "Add, complete and delete tasks; sorted list view, statistics and export.",
    },
    {"name": "filters", "description": "Transient filter criteria applied to the list view."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, service: Optional[TodoService] = None) -> FastAPI:
    """
    Build the FastAPI application around a single TodoService.

    The service is created from the configured storage backend unless one is
    passed in (tests inject a service with an in-memory slot and fixed clock).
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="To-do List",
        description="Local to-do list manager: validation, filtering, sorting and a JSON view model.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.service = service or TodoService(get_storage(settings))

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(SubmissionRejected)
    async def submission_rejected_handler(request: Request, exc: SubmissionRejected) -> JSONResponse:
        """
        Report task name/date rule failures with the same envelope as request
        validation, one entry per failing field.
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Task submission rejected",
                "detail": [
                    {"field": e.field, "code": e.code.value, "message": e.message} for e in exc.errors
                ],
            },
        )

    @app.exception_handler(TaskNotFoundError)
    async def not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": "Task not found"})

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "backend": settings.persistence_backend}

    app.include_router(tasks_router.router)
    app.include_router(filters_router.router)
    return app


_settings = get_settings()
setup_logging(_settings.log_level)
app = create_app(_settings)
