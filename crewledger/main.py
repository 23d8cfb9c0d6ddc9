from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from crewledger.api.v1.api import api_router
from crewledger.core.config import settings
from crewledger.core.exceptions import (
    CaptainRequiredError,
    CrewLedgerError,
    InputError,
    NotFoundError,
    PolicyError,
)
from crewledger.core.logging_config import configure_logging, get_logger
from crewledger.db.session import connect_to_mongo, close_mongo_connection

logger = get_logger("main")

# First match wins; CaptainRequiredError is a PolicyError
_STATUS_CODES = (
    (NotFoundError, 404),
    (CaptainRequiredError, 403),
    (PolicyError, 409),
    (InputError, 422),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(level=settings.LOG_LEVEL)
    await connect_to_mongo()
    yield
    await close_mongo_connection()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def status_code_for(exc: CrewLedgerError) -> int:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 400


@app.exception_handler(CrewLedgerError)
async def crew_ledger_error_handler(request: Request, exc: CrewLedgerError):
    status_code = status_code_for(exc)
    logger.info(
        "Request rejected",
        extra={"path": request.url.path, "code": exc.code, "status_code": status_code},
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": exc.code})


@app.exception_handler(PyMongoError)
async def storage_error_handler(request: Request, exc: PyMongoError):
    logger.error("Storage failure", exc_info=exc, extra={"path": request.url.path})
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage is unavailable", "code": "STORAGE_UNAVAILABLE"},
    )


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}

app.include_router(api_router, prefix=settings.API_V1_STR)
