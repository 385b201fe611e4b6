from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from authservice import __version__
from authservice.auth.jwt import TokenService
from authservice.auth.passwords import PasswordHasher
from authservice.auth.router import router as auth_router
from authservice.auth.store import InMemoryUserStore, UserStore
from authservice.auth.users import UserService
from authservice.base_service import base_service
from authservice.config import Settings, load_settings
from authservice.protected.router import router as protected_router

DOCS_URL = "/swagger-ui"
OPENAPI_URL = "/api-docs/openapi.json"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    base_service.log_event("service.startup", {
        "service": "main",
        "environment": settings.environment,
        "docs": f"http://localhost:{settings.port}{DOCS_URL}",
    })
    yield
    base_service.log_event("service.shutdown", {"service": "main"})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Only field locations are logged; the input may hold a password
    base_service.log_event("request.malformed", {
        "path": request.url.path,
        "fields": [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()],
    })
    return JSONResponse(
        status_code=422,
        content={"detail": "Malformed request"},
    )


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    """
    Build the application and its components.

    Args:
        settings: Configuration, loaded from the environment when omitted
        store: Credential store, a fresh in-memory store when omitted

    Returns:
        Configured FastAPI app
    """
    if settings is None:
        settings = load_settings()
    if store is None:
        store = InMemoryUserStore()

    app = FastAPI(
        title="Auth API",
        description="A simple auth API",
        version=__version__,
        docs_url=DOCS_URL,
        openapi_url=OPENAPI_URL,
        redoc_url=None,
        lifespan=lifespan,
    )

    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    token_service = TokenService(settings)
    app.state.settings = settings
    app.state.store = store
    app.state.token_service = token_service
    app.state.user_service = UserService(store, hasher, token_service)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(auth_router)
    app.include_router(protected_router)
    return app


app = create_app()

# For running directly with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
