from contextlib import asynccontextmanager
from typing import List, Optional, Union
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import ACTIVITIES, DATA_DIR, LOG_LEVEL, PORT
from .logging_setup import setup_logging
from .results import router as results_router
from .sheets import GoogleSheetsRegistrationSource, RegistrationSource
from .store import JsonDocumentStore
from .votes import router as votes_router
from .voting import VotingService


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL)
    yield


async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


def create_app(
    data_dir: Union[str, Path] = DATA_DIR,
    registrations: Optional[RegistrationSource] = None,
    activities: Optional[List[str]] = None,
) -> FastAPI:
    app = FastAPI(title="Contest Vote", lifespan=lifespan)

    app.state.voting = VotingService(JsonDocumentStore(data_dir))
    app.state.registrations = registrations or GoogleSheetsRegistrationSource()
    app.state.activities = list(ACTIVITIES if activities is None else activities)

    app.add_exception_handler(StarletteHTTPException, http_error)
    app.add_exception_handler(RequestValidationError, validation_error)

    app.include_router(votes_router)
    app.include_router(results_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("contest_vote.main:app", host="0.0.0.0", port=PORT, log_level="info")
