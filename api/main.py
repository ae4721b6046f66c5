"""
Main API application
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.auth_api import router as auth_router
from api.config import get_settings
from api.practice_api import router as practice_router
from api.questions_api import router as questions_router
from api.schemas import ERROR_RESPONSES
from api.submission_api import router as submission_router
from database import create_store
from services.auth_service import TokenService
from services.errors import QuizError, ValidationError

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown: the store handle and token secret live here"""
    settings = get_settings()
    logger.info("Starting server - opening %s store...", settings.STORE_BACKEND)

    store = create_store(settings.STORE_BACKEND, settings.MONGODB_URI, settings.MONGODB_DATABASE)
    try:
        await store.connect()
        await store.ensure_indexes()
    except Exception:
        logger.exception("Store initialisation failed")
        await store.close()
        raise

    app.state.store = store
    app.state.tokens = TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.TOKEN_EXPIRE_MINUTES,
    )
    logger.info("Store ready. Server is ready.")

    yield

    logger.info("Shutting down server...")
    await store.close()
    app.state.store = None
    app.state.tokens = None


app = FastAPI(
    title=settings.APP_NAME,
    description="Quiz backend: topic-based random tests, grading and user statistics",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
    """Every service error becomes {success, error, message} with its status code"""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s: %s", request.method, request.url.path, exc.kind, exc.message)
    else:
        logger.debug("%s %s rejected: %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and query parameters use the same envelope as ValidationError"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return await quiz_error_handler(request, ValidationError("; ".join(messages) or "Invalid request"))


app.include_router(auth_router, responses=ERROR_RESPONSES)
app.include_router(questions_router, responses=ERROR_RESPONSES)
app.include_router(practice_router, responses=ERROR_RESPONSES)
app.include_router(submission_router, responses=ERROR_RESPONSES)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
