# backend/main.py
import logging
import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

load_dotenv()

from config import Settings, settings as default_settings
from database import Store
from utils.identity import build_identity_verifier
from utils.stripe_client import build_payment_processor

# Routers
from routes.users import router as users_router
from routes.parcels import router as parcels_router
from routes.riders import router as riders_router
from routes.tracking import router as tracking_router
from routes.payments import router as payments_router
from routes.logs import router as logs_router

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: Store = app.state.store
    try:
        store.connect()
    except SQLAlchemyError as e:
        logger.error(f"Store connection error: {e}")
        if app.state.settings.DB_FAIL_FAST:
            raise
    logger.info("Parcel Delivery Server is starting")

    yield

    store.close()
    logger.info("Parcel Delivery Server shut down")


def create_app(
    settings: Settings = None,
    store: Store = None,
    identity_verifier=None,
    payment_processor=None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Parcel Delivery API", version="1.0.0", lifespan=lifespan)

    # Collaborators shared by every request; never reassigned after startup
    app.state.settings = settings
    app.state.store = store or Store(settings.DATABASE_URL)
    app.state.identity_verifier = identity_verifier or build_identity_verifier(settings)
    app.state.payment_processor = payment_processor or build_payment_processor(settings)

    origins = ["*"]
    if settings.FRONTEND_URL:
        origins = ["http://localhost:5173", "http://127.0.0.1:5173", settings.FRONTEND_URL]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )
        return response

    # Store failures that escaped a handler are reported, never dropped
    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Store error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Store operation failed", "error": str(exc)},
        )

    # Register routers
    app.include_router(users_router)
    app.include_router(parcels_router)
    app.include_router(riders_router)
    app.include_router(tracking_router)
    app.include_router(payments_router)
    app.include_router(logs_router)

    @app.get("/")
    def read_root():
        return {"message": "Parcel Delivery Server is Running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=default_settings.HOST, port=default_settings.PORT)
