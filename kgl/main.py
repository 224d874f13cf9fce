import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from kgl.api import procurements, sales, users
from kgl.core.config import get_settings
from kgl.core.errors import register_exception_handlers
from kgl.db.init import init_db
from kgl.db.session import make_engine, make_session_factory

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("kgl.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One engine for the whole process, one session per request
    engine = make_engine(settings.database_url)
    init_db(engine)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    logger.info("KGL API started")

    yield

    engine.dispose()
    logger.info("KGL API stopped")


app = FastAPI(
    title=settings.app_name,
    description="Backend API for Karibu Groceries Ltd: procurement, sales and user accounts",
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %d %.1fms", request.method, request.url.path, response.status_code, ms)
    return response


register_exception_handlers(app)

# Include routers
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(procurements.router, prefix="/procurements", tags=["procurements"])
app.include_router(sales.router, prefix="/sales", tags=["sales"])


@app.get("/health", tags=["health"])
def health():
    return {"status": "healthy", "version": settings.version}
