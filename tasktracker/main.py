# tasktracker/main.py
import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# load .env before settings / DATABASE_URL are read
load_dotenv()

from fastapi import FastAPI, HTTPException  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from sqlmodel import text  # noqa: E402

from tasktracker.core.config import settings  # noqa: E402
from tasktracker.core.errors import register_error_handlers  # noqa: E402
from tasktracker.core.logging_config import setup_logging  # noqa: E402
from tasktracker.db.session import create_all_tables, engine  # noqa: E402

# model import registers the table on SQLModel.metadata
from tasktracker.models import task as _m_task  # noqa: F401,E402
from tasktracker.routers import pages, task  # noqa: E402

setup_logging(settings.log_level, sql_echo=settings.log_sql)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.db_auto_create:
        logger.info("DB_AUTO_CREATE set, creating tables")
        create_all_tables()
    yield


app = FastAPI(
    title="TaskTracker",
    version=os.getenv("APP_VERSION", "0.1.0"),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(task.router)
app.include_router(pages.router)


@app.get("/health")
def health_app():
    return {"ok": True}


@app.get("/health/db")
def health_db():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception:
        logger.exception("Database health check failed")
        raise HTTPException(status_code=500, detail="Database connection failed")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tasktracker.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
