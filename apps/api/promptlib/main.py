import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from promptlib.core import API_PREFIX, get_settings, limiter
from promptlib.routers import ROUTERS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Prompt Library API starting; CORS origins: %s", settings.cors_origins_list)
    yield


app = FastAPI(
    title="Prompt Library API",
    description="Store reusable prompt templates, organize them in folders and tags, and fill in their variables.",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

api = APIRouter(prefix=API_PREFIX)
for router in ROUTERS:
    api.include_router(router)


@api.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(api)


@app.get("/")
async def root():
    return {"message": "Prompt Library API Running"}
