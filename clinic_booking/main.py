import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from clinic_booking.core import config
from clinic_booking.core.errors import (
    ClinicError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
)
from clinic_booking.database import Base, SessionLocal, engine, ensure_booking_schema
from clinic_booking.models import booking, slot, user  # noqa: F401  (register tables)
from clinic_booking.routes import auth_routes, booking_routes
from clinic_booking.services.slot_generator import seed_admin_user, seed_slots
from clinic_booking.store.sql import SqlStore

logging.basicConfig(level=config.LOG_LEVEL.upper())

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (UnauthorizedError, status.HTTP_403_FORBIDDEN),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
)


def status_code_for(exc: ClinicError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


app = FastAPI(title='Clinic Booking API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.exception_handler(ClinicError)
async def handle_clinic_error(request: Request, exc: ClinicError) -> JSONResponse:
    return JSONResponse(status_code=status_code_for(exc), content={'message': exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'message': 'Invalid request data', 'errors': jsonable_errors(exc)},
    )


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception('Storage failure while handling %s %s', request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'message': 'Internal server error'},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {'loc': list(error.get('loc', ())), 'msg': error.get('msg', ''), 'type': error.get('type', '')}
        for error in exc.errors()
    ]


def seed_database() -> None:
    db = SessionLocal()
    try:
        store = SqlStore(db)
        seed_admin_user(store)
        seed_slots(store)
    finally:
        db.close()


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_booking_schema()
        if config.SEED_ON_STARTUP:
            seed_database()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Clinic Booking API Running'}


app.include_router(auth_routes.router, prefix='/api')
app.include_router(booking_routes.router, prefix='/api')
