from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from app.base.config import settings
from app.base.error_handlers import register_exception_handlers
from app.base.logging_config import app_logger as logger

from app.routers import interview_scheduler

# --- FastAPI app instance ---
app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    version="1.0.0",
    debug=settings.DEBUG_MODE,
    docs_url=None if settings.IS_PROD else "/docs",
    redoc_url=None if settings.IS_PROD else "/redoc",
    openapi_url="/openapi.json"
)

# --- CORS config ---
origins = [
    "http://localhost:3000",     # Local React dev
    "http://localhost:5173",     # Local Vite dev
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Prometheus metrics ---
if settings.ENABLE_PROMETHEUS:
    Instrumentator().instrument(app).expose(app)

# --- Logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"📥 {request.method} request to {request.url}")
    response = await call_next(request)
    logger.info(f"📤 Response: {response.status_code} for {request.url}")
    return response

# --- Exception handlers ---
register_exception_handlers(app)

# --- API Routers ---
app.include_router(interview_scheduler.router)

# --- System endpoints ---
@app.get("/health", tags=["System"])
def health_check():
    return {"status": "ok"}

@app.get("/version", tags=["System"])
def version_check():
    return {
        "version": "1.0.0",
        "api_version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
        "window_days": settings.SCHEDULING_WINDOW_DAYS,
        "slot_minutes": settings.SLOT_DURATION_MINUTES,
    }
