import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api import admin, auth, matches, players, teams
from app.core.config import settings
from app.core.database import engine, Base
from app.core.errors import CricketAdminError, Unauthorized
from app.core.logging import configure_logging
from app.middleware.logging import StructuredLoggingMiddleware
from app import models  # noqa: F401  registers every table on Base.metadata

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Cricket Admin API",
    description="Admin backend for cricket tournament teams, players and matches",
    version="1.0.0"
)

app.add_middleware(StructuredLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(CricketAdminError)
async def handle_domain_error(request: Request, exc: CricketAdminError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": exc.message, "status_code": exc.status_code},
        headers=headers,
    )

@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": "Validation Error", "errors": jsonable_encoder(exc.errors())},
    )

@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "Internal Server Error"},
    )

# Include routers
app.include_router(auth.router, prefix="/api/admin", tags=["auth"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(teams.router, prefix="/api/teams", tags=["teams"])
app.include_router(players.router, prefix="/api/players", tags=["players"])
app.include_router(matches.router, prefix="/api/matches", tags=["matches"])

@app.get("/")
async def root():
    return {"message": "Cricket Admin API"}

@app.get("/health")
async def health():
    return {"status": "ok"}
