from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    body = exc.to_body()
    logger.warning(f"Client error on {request.method} {request.url.path}: {body['error']}")
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(
        f"Server error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} {exc.base_error.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def create_app(ApplicationConfig, lifespan=None) -> FastAPI:
    app = FastAPI(title="Document Sharing API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        annotations,
        documents,
        health_check,
        identities,
        invitation,
        links,
        shared,
        sharing,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(identities.router, tags=["Identities"])
    app.include_router(documents.router, tags=["Documents"])
    app.include_router(sharing.router, tags=["Sharing"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(links.router, tags=["Links"])
    app.include_router(shared.router, tags=["Shared"])
    app.include_router(annotations.router, tags=["Annotations"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
