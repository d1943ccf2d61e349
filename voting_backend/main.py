from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from voting_backend.api import voting, webhooks
from voting_backend.config import get_config
from voting_backend.lib.logger import configure_logger, setup_uvicorn_logging
from voting_backend.middleware.logging import LoggingMiddleware

# Configure module logger
logger = configure_logger(__name__)

config = get_config()

# Define app
app = FastAPI(
    title="Stacks Voting Backend",
    description="Chainhook ingestion and poll aggregation for the Stacks voting contract",
    version="0.1.0",
)

# Add logging middleware first
app.add_middleware(LoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# Simple health check endpoint
@app.get("/")
async def health_check():
    """Simple health check endpoint."""
    return {"status": "healthy"}


# Load API routes
app.include_router(webhooks.router)
app.include_router(voting.router)


@app.on_event("startup")
async def startup_event():
    """Run web server startup tasks."""
    setup_uvicorn_logging()

    logger.info(
        "Starting voting backend",
        extra={
            "network": config.network.network,
            "contract": f"{config.contract.address}.{config.contract.name}",
        },
    )


@app.on_event("shutdown")
async def shutdown_event():
    """Run web server shutdown tasks."""
    logger.info("Voting backend shutdown complete")
