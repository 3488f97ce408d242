import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubmanager.config import config
from clubmanager.dependencies import get_db
from clubmanager.auth.auth import router as auth_router
from clubmanager.endpoints import (
    assignments,
    sessions,
    statistics,
    absence_alerts,
    trainer_hours,
    settings,
    cron,
)

# Configure the package logger once; modules use logging.getLogger(__name__)
logger = logging.getLogger("clubmanager")
logger.setLevel(config.LOG_LEVEL)

ch = logging.StreamHandler()
ch.setLevel(config.LOG_LEVEL)
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
ch.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(ch)

logger.info("Application started and logger configured.")


app = FastAPI(
    title="Club Manager API",
    description="API for training groups, sessions, attendance and trainer hours",
    version="1.0.0"
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(auth_router)
app.include_router(assignments.router)
app.include_router(sessions.router)
app.include_router(statistics.router)
app.include_router(absence_alerts.router)
app.include_router(trainer_hours.router)
app.include_router(settings.router)
app.include_router(cron.router)


@app.get("/")
def read_root():
    return {"message": "Club Manager API"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        if 'ctx' in error and 'error' in error['ctx']:
            # Surface the message of ValueErrors raised in our validators
            if isinstance(error['ctx']['error'], ValueError):
                error['msg'] = str(error['ctx']['error'])
                del error['ctx']
        errors.append(error)

    return JSONResponse(
        status_code=422,
        content={"detail": errors},
    )


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {str(e)}")
        return {"status": "unhealthy", "database": "disconnected"}
