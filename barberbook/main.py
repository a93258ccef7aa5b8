import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import models so every table is registered with SQLAlchemy Base
from . import models  # noqa: F401
from .config import FRONTEND_URL
from .database import Base, engine
from .domain.barbershops.router import router as barbershops_router
from .domain.bookings.router import client_router as my_bookings_router
from .domain.bookings.router import router as bookings_router
from .domain.catalog.router import router as catalog_router
from .domain.clients.router import router as clients_router
from .domain.commissions.router import router as commissions_router
from .domain.finance.router import router as finance_router
from .domain.notifications.router import feed_router as notifications_feed_router
from .domain.notifications.router import router as notifications_router
from .domain.professionals.router import router as professionals_router
from .domain.public.router import router as public_router
from .domain.subscriptions.router import client_router as my_subscription_router
from .domain.subscriptions.router import router as subscriptions_router
from .domain.subscriptions.router import webhook_router as payment_webhooks_router
from .domain.tutorials.router import router as tutorials_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="BarberBook API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


# CORS Configuration
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    f"{FRONTEND_URL},http://localhost:5173,http://localhost:3000",
).split(",")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(barbershops_router)
app.include_router(catalog_router)
app.include_router(professionals_router)
app.include_router(bookings_router)
app.include_router(my_bookings_router)
app.include_router(clients_router)
app.include_router(finance_router)
app.include_router(commissions_router)
app.include_router(subscriptions_router)
app.include_router(my_subscription_router)
app.include_router(payment_webhooks_router)
app.include_router(notifications_router)
app.include_router(notifications_feed_router)
app.include_router(tutorials_router)
app.include_router(public_router)


@app.get("/")
def root():
    return {"message": "BarberBook API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
