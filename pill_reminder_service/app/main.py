import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.core.app_config import AUTO_SKIP_PAST_DOSES, ENABLE_TICKER, LOG_LEVEL, PILL_DB_PATH, TICK_INTERVAL_S
from app.api.routes_medications import router as medications_router
from app.api.routes_doses import router as doses_router
from app.api.routes_adherence import router as adherence_router
from app.api.routes_notifications import router as notifications_router
from app.api.routes_doctor_visit import router as doctor_visit_router
from app.services.persistence import KeyValueStore, PersistenceAdapter
from app.services.store import MedicationStore
from app.services.ticker import MinuteTicker

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

def build_store() -> MedicationStore:
    adapter = PersistenceAdapter(KeyValueStore(PILL_DB_PATH))
    store = MedicationStore(adapter, auto_skip=AUTO_SKIP_PAST_DOSES)
    store.load()
    return store

def create_app(store: Optional[MedicationStore] = None, enable_ticker: bool = ENABLE_TICKER) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is None:
            app.state.store = build_store()
        ticker = None
        if enable_ticker:
            ticker = MinuteTicker(app.state.store, poll_interval=TICK_INTERVAL_S)
            ticker.start()
            logger.info("Reminder ticker started (every %ss)", TICK_INTERVAL_S)
        yield
        if ticker is not None:
            ticker.stop()

    app = FastAPI(title="Pill Reminder Service", version="1.0", lifespan=lifespan)
    app.state.store = store

    app.include_router(medications_router)
    app.include_router(doses_router)
    app.include_router(adherence_router)
    app.include_router(notifications_router)
    app.include_router(doctor_visit_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/")
    def root():
        return {"ok": True, "service": "Pill Reminder Service"}

    return app

app = create_app()
