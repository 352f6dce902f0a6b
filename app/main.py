from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from app.config import settings
from app.middleware.cors import CORSPolicy, CORSPolicyMiddleware
from app.routes import movies
from app.store import MovieStore, get_movie_store, load_seed_movies
from app.utils.exceptions import MovieNotFoundError, MovieValidationError
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# ============================================
# Application Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events

    Startup:
    - Seed the in-memory movie store
    - Log configuration

    Shutdown:
    - Nothing is persisted; the collection is dropped with the process
    """
    # Startup
    logger.info("=" * 60)
    logger.info("🚀 Movies API Starting...")
    logger.info(f"   Environment: {settings.environment}")
    logger.info(f"   CORS Origins: {len(settings.allowed_origins)} configured")
    app.state.movie_store = MovieStore(load_seed_movies(settings.seed_path))
    logger.info(f"   Movies loaded: {len(app.state.movie_store)}")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("=" * 60)
    logger.info("🛑 Movies API Shutting Down...")
    logger.info(f"   Discarding {len(app.state.movie_store)} in-memory movies")
    logger.info("=" * 60)


# Create FastAPI app with lifespan handler
app = FastAPI(
    title="Movies API",
    description="CRUD over an in-memory movie collection",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ============================================
# CORS - Whitelist allowed origins
# ============================================

cors_policy = CORSPolicy(settings.allowed_origins)
app.add_middleware(CORSPolicyMiddleware, policy=cors_policy)


# ============================================
# Exception Handlers
# ============================================

@app.exception_handler(MovieValidationError)
async def movie_validation_exception_handler(request: Request, exc: MovieValidationError):
    return JSONResponse(status_code=400, content={"error": exc.violations})


@app.exception_handler(MovieNotFoundError)
async def movie_not_found_exception_handler(request: Request, exc: MovieNotFoundError):
    logger.warning(f"A non-existent movie ID was requested: {exc.movie_id}")
    return JSONResponse(status_code=404, content={"message": "Movie not found"})


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body could not be parsed at all (malformed JSON, empty body)"""
    violations = []
    for error in exc.errors():
        path = [part for part in error["loc"] if part != "body"]
        violations.append({"path": path, "message": error["msg"], "code": error["type"]})
    return JSONResponse(status_code=400, content={"error": violations})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler: fail this request only, keep serving.
    Runs outside the middleware stack, so CORS headers are applied here.
    """
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    response = JSONResponse(
        status_code=500,
        content={"message": "Internal server error"}
    )
    return cors_policy.apply(request, response)


# ============================================
# Routes
# ============================================

@app.get("/health", tags=["Health"])
def health_check(store: MovieStore = Depends(get_movie_store)):
    """Health check for monitoring"""
    return {
        "status": "healthy",
        "api_version": API_VERSION,
        "movies": len(store),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


app.include_router(movies.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
