from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from filmorate.core.config import get_settings
from filmorate.core.error_handlers import register_error_handlers
from filmorate.core.logging_config import setup_logging
from filmorate.domain.films import Film
from filmorate.domain.users import User
from filmorate.repositories.memory_storage import InMemoryStorage
from filmorate.routers import films as films_router
from filmorate.routers import users as users_router
from filmorate.services.film_service import FilmService
from filmorate.services.user_service import UserService


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every JSON response. HSTS is only sent in prod."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app() -> FastAPI:
    """Build an application with fresh, empty film and user stores."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name)

    allowed_cors = settings.allowed_origins
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_cors,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    user_service = UserService(InMemoryStorage[User]("User"))
    film_service = FilmService(InMemoryStorage[Film]("Film"), user_service)
    app.state.user_service = user_service
    app.state.film_service = film_service

    register_error_handlers(app)
    app.include_router(films_router.router)
    app.include_router(users_router.router)
    return app


app = create_app()
