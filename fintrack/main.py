import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fintrack.config import CORS_ORIGINS, LOG_LEVEL
from fintrack.domain.exceptions import (
    InvalidTransaction,
    TransactionNotFound,
    UnauthorizedAccess,
)
from fintrack.presentation.bills_api import router as bills_router
from fintrack.presentation.transactions_api import router as transactions_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("fintrack")

app = FastAPI(title="Finance Tracker API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TransactionNotFound)
async def transaction_not_found_handler(request: Request, exc: TransactionNotFound):
    logger.error("Transaction not found: %s", exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(UnauthorizedAccess)
async def unauthorized_access_handler(request: Request, exc: UnauthorizedAccess):
    logger.warning("Unauthorized access attempt: %s", exc)
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(InvalidTransaction)
async def invalid_transaction_handler(request: Request, exc: InvalidTransaction):
    logger.warning("Validation error: %s", exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


app.include_router(transactions_router)
app.include_router(bills_router)
