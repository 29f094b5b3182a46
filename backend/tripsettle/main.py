"""
FastAPI entrypoint for the Tripsettle backend application.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tripsettle.core.config import settings
from tripsettle.core.utils import format_error
from tripsettle.api.router import api_router

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Expense balances and settlements for group trips",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return malformed snapshots in the common error envelope."""
    logger.warning(f"Rejected request to {request.url.path}: {len(exc.errors())} validation errors")
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(format_error("Invalid request", exc.errors()))
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Tripsettle API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
