"""FastAPI application entry point"""
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from breadmade.api.v1 import admin, auctions, auth, bookings, funnels, leads, payments, project_requests, purchases
from breadmade.core.auth import AuthClient
from breadmade.core.cache import LocalCache
from breadmade.core.config import Settings, settings as default_settings
from breadmade.core.database import RemoteStore
from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.services.auth_context import AuthContext
from breadmade.services.auth_service import AuthService
from breadmade.services.payment_service import PaymentService
from breadmade.utils.logger import configure_logging, logger


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[RemoteStore] = None,
    auth_client: Optional[AuthClient] = None,
    cache: Optional[LocalCache] = None,
    payment_service: Optional[PaymentService] = None,
) -> FastAPI:
    """
    Build the application and its backend clients

    Anything not passed in is created from ``settings``; the clients built
    here share one ``httpx.AsyncClient`` that is closed on shutdown.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)
    http_client: Optional[httpx.AsyncClient] = None
    if store is None or auth_client is None or payment_service is None:
        http_client = httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)

    cache = cache or LocalCache(settings.AUTH_CACHE_PATH)
    store = store or RemoteStore(settings, client=http_client)
    auth_client = auth_client or AuthClient(settings, client=http_client, cache=cache)
    payment_service = payment_service or PaymentService(settings, client=http_client)
    auth_context = AuthContext(AuthService(auth_client, store, cache))

    app = FastAPI(
        title=settings.APP_NAME,
        description="Auctions, funnels, leads and payments for Bread Made Easy",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.cache = cache
    app.state.store = store
    app.state.auth_client = auth_client
    app.state.payment_service = payment_service
    app.state.auth_context = auth_context

    @app.on_event("startup")
    async def startup_event():
        """Run on application startup"""
        logger.info(f"Starting {settings.APP_NAME}")
        logger.info(f"Environment: {settings.APP_ENV}")
        await auth_context.start()
        if auth_context.user:
            logger.info(f"Restored session for {auth_context.user.email}")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Run on application shutdown"""
        logger.info(f"Shutting down {settings.APP_NAME}")
        auth_context.stop()
        await store.aclose()
        await auth_client.aclose()
        await payment_service.aclose()
        if http_client is not None:
            await http_client.aclose()

    @app.exception_handler(ServiceError)
    async def handle_service_error(_: object, exc: ServiceError):
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(RemoteStoreError)
    async def handle_remote_store_error(_: object, exc: RemoteStoreError):
        return JSONResponse(status_code=400, content={"detail": exc.message, "error": exc.to_dict()})

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": settings.APP_NAME,
            "version": "1.0.0",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    prefix = settings.API_V1_PREFIX
    app.include_router(auth.router, prefix=prefix, tags=["auth"])
    app.include_router(leads.router, prefix=prefix, tags=["leads"])
    app.include_router(bookings.router, prefix=prefix, tags=["bookings"])
    app.include_router(funnels.router, prefix=prefix, tags=["funnels"])
    app.include_router(auctions.router, prefix=prefix, tags=["auctions"])
    app.include_router(purchases.router, prefix=prefix, tags=["purchases"])
    app.include_router(project_requests.router, prefix=prefix, tags=["requests"])
    app.include_router(payments.router, prefix=prefix, tags=["payments"])
    app.include_router(admin.router, prefix=prefix, tags=["admin"])

    return app


app = create_app()
