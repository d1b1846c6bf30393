import time
from fastapi import FastAPI, Request, status, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from routers import orders, payments, users, books, stats

# Registers every model on Base.metadata
import models

from core.config import settings
from core.database import Base, create_db_engine, create_session_factory
from core.exceptions import ServiceError
from core.logging_config import setup_logging, get_logger
from middleware import RequestIDMiddleware, get_request_id
from services.identity_service import IdentityVerifier
from services.payment_gateway import StripePaymentGateway
from utils.logger import sanitize_log_data

setup_logging(
    log_level=settings.LOG_LEVEL,
    log_dir=settings.LOG_DIR
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The app owns exactly one engine; handlers get sessions through get_db.
    engine = create_db_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)

    app.state.session_factory = create_session_factory(engine)
    app.state.identity_verifier = IdentityVerifier(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        audience=settings.TOKEN_AUDIENCE
    )
    app.state.payment_gateway = StripePaymentGateway(
        api_key=settings.STRIPE_SECRET_KEY,
        currency=settings.PAYMENT_CURRENCY,
        success_url=f"{settings.CLIENT_URL}/dashboard/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{settings.CLIENT_URL}/dashboard/payment-cancelled"
    )
    logger.info("Application startup complete", extra={"event": "startup"})

    yield

    engine.dispose()
    logger.info("Application shutting down", extra={"event": "shutdown"})


app = FastAPI(
    title="Bookshop API",
    description="Books, orders and Stripe checkout for the bookshop",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request with method, path, status code and duration.
    """
    start_time = time.time()

    response = await call_next(request)

    duration = (time.time() - start_time) * 1000
    client_ip = request.client.host if request.client else "unknown"

    logger.info(
        f'{client_ip} - "{request.method} {request.url.path} HTTP/1.1" {response.status_code}',
        extra={
            "method": request.method,
            "path": request.url.path,
            "query": sanitize_log_data(dict(request.query_params)),
            "status_code": response.status_code,
            "duration_ms": round(duration, 2),
            "client_ip": client_ip
        }
    )

    return response


# Added last so it wraps the logging middleware and the id is set first
app.add_middleware(RequestIDMiddleware)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Server Running"


@app.get("/health")
async def health_check():
    logger.debug("Health check requested")
    return {"status": "Healthy"}


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(
            f"{exc.kind}: {exc.detail}",
            extra={"path": request.url.path, "method": request.method}
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.kind}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Log anything unhandled with its stack trace and answer 500 with the request id.
    """
    if isinstance(exc, (HTTPException, RequestValidationError)):
        raise

    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__
        },
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "request_id": get_request_id(request)}
    )


app.include_router(orders.router)
app.include_router(payments.router)
app.include_router(users.router)
app.include_router(books.router)
app.include_router(stats.router)
