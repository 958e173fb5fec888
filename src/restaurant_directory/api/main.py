from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restaurant_directory.api.routes import router
from restaurant_directory.config import settings
from restaurant_directory.data.source import read_document, unwrap_document
from restaurant_directory.data.store import RecordStore
from restaurant_directory.exceptions import DataLoadError
from restaurant_directory.logging_config import get_logger, setup_logging, teardown_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(level=settings.logging.level, log_file=settings.logging.file)

    # Startup: read the static document once and index it
    source = settings.data.source
    logger.info("Loading restaurant document from %s...", source)
    try:
        document = read_document(source)
        store = RecordStore()
        store.load(unwrap_document(document))
        app.state.document = document
        app.state.store = store
    except DataLoadError as e:
        logger.error("Failed to load restaurant document: %s", e.message)
        # Keep serving /health; the data endpoints answer 503.
        app.state.document = None
        app.state.store = None

    yield

    logger.info("Shutting down")
    teardown_logging()


app = FastAPI(
    title="Restaurant Directory Data API",
    description="Publishes the static restaurant document and read-only summaries of it.",
    version="2.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
def health_check():
    """Simple health check endpoint."""
    store = getattr(app.state, "store", None)
    return {
        "status": "healthy" if store is not None else "degraded",
        "records": len(store) if store is not None else 0,
    }
