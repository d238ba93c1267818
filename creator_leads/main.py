from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from creator_leads import __version__
from creator_leads.config import settings
from creator_leads.api.routes_health import router as health_router
from creator_leads.api.routes_leads import router as leads_router
from creator_leads.api.routes_templates import router as templates_router
from creator_leads.errors import CoreError
from creator_leads.models import create_all
from creator_leads.models.db import SessionLocal
from creator_leads.services.template_service import TemplateStore
from creator_leads.utils.log import get_logger, setup_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger()
    logger.info("Starting up Creator Leads API (env=%s)", settings.ENV)
    # Auto-create tables if they don't exist
    try:
        create_all()
    except OperationalError as e:
        raise RuntimeError("Database connection failed. Check DATABASE_URL and credentials.") from e

    if settings.SEED_DEFAULT_TEMPLATES:
        db = SessionLocal()
        try:
            TemplateStore(db).seed_defaults()
        finally:
            db.close()
    yield


# Create FastAPI app
app = FastAPI(
    title="Creator Leads API",
    version=__version__,
    description="Brand-partnership lead lifecycle, conversation threads and response templates.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(leads_router)
app.include_router(templates_router)


@app.exception_handler(CoreError)
async def core_error_handler(request: Request, exc: CoreError):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "invalid"))
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": f"Invalid request: {'; '.join(problems)}"},
    )


# Base route
@app.get("/")
def root():
    return {
        "name": "Creator Leads API",
        "env": settings.ENV,
        "status": "running",
        "docs_url": "/docs"
    }


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})
