# main.py
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from gastos.domain.errors import DomainError
from gastos.infrastructure.api.middlewares.request_id import RequestIdMiddleware
from gastos.infrastructure.api.routers import (
    cards_router,
    catalog_router,
    documents_router,
    invoices_router,
    ocr_router,
)
from gastos.infrastructure.persistence.database import init_db

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - [%(funcName)s] - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Creando tablas de la base de datos si no existen...")
    init_db()
    yield


app = FastAPI(
    title="API de Gestión de Gastos con OCR",
    description="Gestión de tarjetas, facturas y gastos, con extracción automática de datos de facturas.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Manejo de errores: siempre el mismo sobre JSON ---
def request_id_of(request: Request):
    return getattr(request.state, "request_id", None)


def error_body(request: Request, code: str, message: str, details=None) -> dict:
    return {
        "status": "error",
        "error_code": code,
        "message": message,
        "details": details,
        "request_id": request_id_of(request),
        "timestamp": int(time.time() * 1000),
    }


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    if exc.status_code >= 500:
        logger.error(f"[{request_id_of(request)}] {exc.code}: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"[{request_id_of(request)}] {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.code, exc.message, exc.details or None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=error_body(request, "VALIDATION_ERROR", "Error de validación", {"errors": jsonable_errors(exc)}),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, "HTTP_ERROR", str(exc.detail)),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"[{request_id_of(request)}] Error interno no controlado", exc_info=exc)
    details = {"exception": str(exc)} if config.is_development() else None
    return JSONResponse(
        status_code=500,
        content=error_body(request, "INTERNAL_ERROR", "Error interno del servidor", details),
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


app.include_router(ocr_router.router)
app.include_router(cards_router.router)
app.include_router(invoices_router.router)
app.include_router(invoices_router.fields_router)
for router in catalog_router.routers:
    app.include_router(router)
app.include_router(documents_router.router)


@app.get("/", tags=["Health Check"])
def read_root():
    return {"status": "ok", "message": "Bienvenido a la API de Gestión de Gastos"}
