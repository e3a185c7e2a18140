import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment variables from .env file before any module reads them
load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from .database import init_db, is_database_configured  # noqa: E402
from .routes.evaluation import router as evaluation_router  # noqa: E402
from .routes.ideas import router as ideas_router  # noqa: E402
from .routes.notifications import router as notifications_router  # noqa: E402
from .services.demo_data import demo_idea_records, demo_notification_records  # noqa: E402
from .services.repositories import InMemoryIdeaRepository, InMemoryNotificationRepository  # noqa: E402

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    print("Starting VentureMatch API")
    print(f"   Database:   {'Configured' if is_database_configured() else 'Not set (demo mode, in-memory store)'}")
    print(f"   OpenAI Key: {'Configured' if os.getenv('OPENAI_API_KEY') else 'Not set (heuristic scoring only)'}")
    init_db()
    print("   Ready to match ideas with investors!")

    yield

    print("Shutting down VentureMatch API")


app = FastAPI(
    title="VentureMatch: startup ideas meet investors",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Demo-mode stores; only used when no DATABASE_URL is configured
app.state.demo_ideas = InMemoryIdeaRepository(demo_idea_records())
app.state.demo_notifications = InMemoryNotificationRepository(demo_notification_records())

_default_origins = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000"
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", _default_origins).split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ideas_router)
app.include_router(evaluation_router)
app.include_router(notifications_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "VentureMatch",
        "version": "0.1.0",
        "description": "Marketplace connecting entrepreneurs' startup ideas with investors",
        "docs": "/docs",
        "demo": not is_database_configured(),
        "endpoints": {
            "ideas": "GET/POST /ideas - Browse or submit ideas",
            "review": "GET /ideas/{id}/review - Score, SWOT and similar ideas",
            "notifications": "GET /notifications - Investor interest and system notices",
            "health": "GET /health - Service health check",
        }
    }


@app.get(
    "/health",
    summary="Global Health Check",
    description="Check if the API server is running",
    tags=["General"]
)
async def health():
    """Global health check endpoint."""
    return {
        "status": "healthy",
        "service": "venturematch",
        "version": "0.1.0",
        "database": "connected" if is_database_configured() else "demo",
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if os.getenv("DEBUG", "false").lower() == "true" else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "venturematch.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("DEBUG", "true").lower() == "true",
    )
