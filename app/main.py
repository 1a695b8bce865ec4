from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger

from app.api.routes import api_router
from app.api.v1 import v1_router
from app.api.v1.envelope import error_response
from app.core.config import settings
from app.core.logging_config import setup_logging
from app.domain.services.amount_words import InvalidAmount
from app.domain.services.gst_split import DivisionByZero
from app.domain.services.invoice_builder import InvalidInvoiceNumber
from app.domain.services.payroll import SettlementError

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("{} starting (env={})", settings.APP_NAME, settings.ENVIRONMENT)
    yield
    logger.info("{} stopped", settings.APP_NAME)


app = FastAPI(title="SiteLedger", version="0.1.0", lifespan=lifespan)


# Domain errors are bad client input: 422 with the standard envelope.
@app.exception_handler(InvalidAmount)
@app.exception_handler(DivisionByZero)
@app.exception_handler(InvalidInvoiceNumber)
@app.exception_handler(SettlementError)
async def domain_error_handler(request: Request, exc: Exception):
    logger.warning("{} {} rejected: {}", request.method, request.url.path, exc)
    return error_response(422, exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(422, exc, errors=list(exc.errors()))


app.include_router(api_router)
app.include_router(v1_router)
