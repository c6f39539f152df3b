import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from config import settings
from core.clock import ClockTicker
from core.meal_store import TARGET_KCAL, PersistedStateError
from services.db import dispose_engines
from services.state import get_clock_display
from api.v1.router import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_LOG = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # header clock lives exactly as long as the app
    display = get_clock_display()
    async with ClockTicker(settings.clock_interval_s, display.update):
        _LOG.info("mealcheck up (env=%s, target=%d kcal)", settings.env_name, TARGET_KCAL)
        yield
    dispose_engines()


app = FastAPI(title="Mealcheck API", version="1.0.0", lifespan=lifespan)

# single-device checklist; tighten CORS_ORIGINS when exposed
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(PersistedStateError)
async def persisted_state_error(request: Request, exc: PersistedStateError) -> JSONResponse:
    _LOG.error("cannot load meals: %s", exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health", tags=["meta"])
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.env_name}
