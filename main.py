from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
import logging
from app.routers import (
    leases,
    signatures,
)
from app.core.config import settings as app_settings
from app.core.db import init_models
from app.core.exceptions import SignRequestError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup and shutdown events.
    """
    # Startup
    logger.info("Starting Lease Signing API...")
    await init_models()
    Path(app_settings.SIGNED_DOCS_DIR).mkdir(parents=True, exist_ok=True)
    logger.info(f"Signed documents stored in {app_settings.SIGNED_DOCS_DIR}")

    yield

    # Shutdown
    logger.info("Shutting down Lease Signing API...")


app = FastAPI(
    title="Lease Signing API",
    description="Lease e-signature sessions with placeholder-based initials and signatures",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SignRequestError)
async def sign_request_error_handler(request: Request, exc: SignRequestError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "service": "lease-signing",
        "sign_link_expire_hours": app_settings.SIGN_LINK_EXPIRE_HOURS,
    }


app.include_router(leases.router)
app.include_router(signatures.router)

app.mount(
    app_settings.SIGNED_DOCS_BASE_URL,
    StaticFiles(directory=app_settings.SIGNED_DOCS_DIR, check_dir=False),
    name="signed-documents",
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
