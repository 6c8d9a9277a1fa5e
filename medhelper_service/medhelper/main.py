import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from medhelper.api.routes_doses import router as doses_router
from medhelper.api.routes_medications import router as medications_router
from medhelper.api.routes_settings import router as settings_router
from medhelper.core.clock import get_clock
from medhelper.core.config import AUTO_SKIP_INTERVAL_S, HOST, LOG_LEVEL, PORT, SEED_DEFAULT_CATALOG
from medhelper.services.auto_skip import run_auto_skip
from medhelper.services.catalog import get_catalog, seed_default_catalog
from medhelper.services.log_store import get_log_store

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def _reconcile_loop(interval_s: int) -> None:
    # all state is rebuilt from the clock + log on every pass, so cancelling is safe
    while True:
        try:
            run_auto_skip(get_catalog(), get_log_store(), get_clock())
        except Exception:
            logger.exception("Auto-skip pass failed")
        await asyncio.sleep(interval_s)


@asynccontextmanager
async def lifespan(app: FastAPI):
    catalog = get_catalog()
    if SEED_DEFAULT_CATALOG and not catalog.list():
        catalog.add_many(seed_default_catalog())
        logger.info("Seeded %d default medication(s)", len(catalog.list()))

    # one pass up front so doses that went stale while the service was down are settled
    run_auto_skip(catalog, get_log_store(), get_clock())

    task = None
    if AUTO_SKIP_INTERVAL_S > 0:
        task = asyncio.create_task(_reconcile_loop(AUTO_SKIP_INTERVAL_S))
        logger.info("Auto-skip loop every %ss", AUTO_SKIP_INTERVAL_S)

    yield

    if task is not None:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


app = FastAPI(title="MedHelper Dose Service", version="1.0", lifespan=lifespan)

app.include_router(medications_router)
app.include_router(doses_router)
app.include_router(settings_router)

@app.get("/health")
def health():
    return {"ok": True}
@app.get("/")
def root():
    return {"ok": True, "service": "MedHelper Dose Service"}


def run() -> None:
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
