#!/usr/bin/env python3
"""
Publana - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Builds the route table and runs the API server

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import redis.asyncio as redis
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from publana import __version__
from publana.config.provider import ConfigProvider, EnvConfigProvider
from publana.errors import ApiError
from publana.logging_config import configure_logging, get_logging_config
from publana.modules.api.admin import create_admin_router
from publana.modules.api.routes import create_api_router
from publana.modules.auth import AuthModule
from publana.modules.posts import ContentHost, create_content_host
from publana.modules.posts.service import PostService
from publana.modules.storage import OptionStore, create_option_store
from publana.modules.tokens import TokenConsole, TokenGenerator, TokenStore

logger = logging.getLogger(__name__)


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    option_store: Optional[OptionStore] = None,
    content_host: Optional[ContentHost] = None,
    token_generator: Optional[TokenGenerator] = None,
    setup_logging: bool = True,
) -> FastAPI:
    """
    Build the Publana application.

    Args:
        config_provider: Configuration source (environment by default)
        option_store: Persistence backend; built from config when omitted
        content_host: Post storage host; built from config when omitted
        token_generator: Token generator for the admin console
        setup_logging: Apply the logging dict config

    Returns:
        FastAPI application with the API, admin and health routes included
    """
    config_provider = config_provider or EnvConfigProvider()
    api_config = config_provider.get_api_config()
    storage_config = config_provider.get_storage_config()
    auth_config = config_provider.get_auth_config()
    host_config = config_provider.get_content_host_config()

    if setup_logging:
        configure_logging(api_config.log_level)

    option_store = option_store or create_option_store(storage_config)
    content_host = content_host or create_content_host(host_config)

    token_store = TokenStore(option_store, option_key=storage_config.token_option_key)
    auth_module = AuthModule(token_store, admin_api_keys=auth_config.admin_api_keys)
    post_service = PostService(content_host, timeout=host_config.timeout)
    console = TokenConsole(token_store, token_generator)

    if not auth_config.admin_api_keys:
        logger.warning("ADMIN_API_KEYS is empty - admin token routes will reject every request")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - initialize and cleanup resources.
        """
        logger.info("Starting Publana API...")
        await token_store.ensure_initialized()
        logger.info(f"Publana API started, routes under {api_config.namespace}")

        yield

        logger.info("Shutting down Publana API...")
        await content_host.close()
        await option_store.close()
        logger.info("Publana API shutdown complete")

    app = FastAPI(
        title="Publana API",
        description="Create posts on the content host with bearer token authentication",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.option_store = option_store
    app.state.token_store = token_store
    app.state.content_host = content_host
    app.state.console = console

    app.include_router(
        create_api_router(auth_module, post_service, brand_name=api_config.brand_name),
        prefix=api_config.namespace,
    )
    app.include_router(create_admin_router(auth_module, console))

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint.

        Returns:
            200: Service healthy
            503: Service unhealthy
        """
        try:
            storage_ok = await option_store.ping()
        except redis.RedisError as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(status_code=503, content={"status": "unhealthy", "error": str(e)})

        if not storage_ok:
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "storage": "disconnected"},
            )

        return {"status": "healthy", "storage": "connected", "version": __version__}

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        """Render API errors as {code, message, data: {status}}."""
        return JSONResponse(status_code=exc.status, content=exc.to_dict())

    @app.exception_handler(redis.RedisError)
    async def redis_error_handler(request: Request, exc: redis.RedisError):
        """Handle Redis connection and timeout errors."""
        logger.error(f"Redis error: {exc}")
        return JSONResponse(
            status_code=503,
            content={
                "code": "publana_storage_unavailable",
                "message": "Token storage is unavailable.",
                "data": {"status": 503},
            },
        )

    return app


def main() -> None:
    """Run the API server with uvicorn."""
    api_config = EnvConfigProvider().get_api_config()
    uvicorn.run(
        "publana.main:create_app",
        factory=True,
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
