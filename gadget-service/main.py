# main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

import routes_auth
import routes_gadgets
from config import APP_ENV, CORS_ORIGINS, LOG_LEVEL, PORT
from database import engine
from errors import GadgetApiError
from models import Base
from schemas import HealthResponse, WelcomeResponse

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = {
    "auth": "/api/auth",
    "gadgets": "/api/gadgets",
    "health": "/health",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        # For initial setup; schema changes are applied outside the service
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"IMF Gadget API started ({APP_ENV})")

    yield

    await engine.dispose()
    logger.info("Database engine disposed.")


app = FastAPI(
    title="IMF Gadget API",
    description="Manage the most advanced gadgets in the world.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes_auth.router)
app.include_router(routes_gadgets.router)


# Error handling
@app.exception_handler(GadgetApiError)
async def gadget_api_error_handler(request: Request, exc: GadgetApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid data provided", "code": "VALIDATION_ERROR"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        content = {
            "error": "Endpoint not found",
            "code": "NOT_FOUND",
            "message": f"The requested endpoint {request.method} {request.url.path} does not exist",
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        }
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        content = {"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}
    else:
        content = {"error": str(exc.detail), "code": "HTTP_ERROR"}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": "A record with this data already exists", "code": "DUPLICATE_ENTRY"},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Database operation failed", "code": "DATABASE_ERROR"},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error", "code": "INTERNAL_ERROR"},
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    return HealthResponse(
        status="operational",
        message="IMF Gadget API is running smoothly",
        timestamp=datetime.now(timezone.utc),
        environment=APP_ENV,
    )


@app.get("/", response_model=WelcomeResponse)
async def root():
    """
    Welcome message listing the top-level endpoints.
    """
    return WelcomeResponse(
        message="Welcome to the IMF Gadget API",
        description="Your mission, should you choose to accept it, is to manage the most advanced gadgets in the world.",
        version=app.version,
        endpoints=AVAILABLE_ENDPOINTS,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=APP_ENV == "development")
