import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings
from app.core.database import engine, Base
from app.core.exceptions import StorageError
from app.api import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Создаем таблицы
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Sales Admin API",
    description="API для учёта клиентов, ставок и продаж",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(StorageError)
def storage_error_handler(request: Request, exc: StorageError):
    # Пачки, записанные до ошибки, не откатываются - сообщаем сколько их
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "inserted": exc.inserted},
    )


@app.exception_handler(SQLAlchemyError)
def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


@app.get("/")
def root():
    return {"message": "Sales Admin API", "version": "1.0.0"}


@app.get("/health")
def health():
    return {"status": "ok"}
