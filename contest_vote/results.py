# registrations + aggregated results
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from .errors import RegistrationError, StorageError, UpstreamAuthError, UpstreamNotFound
from .models import Registration, Results
from .sheets import RegistrationSource
from .tally import build_results
from .votes import get_voting
from .voting import VotingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_registration_source(request: Request) -> RegistrationSource:
    return request.app.state.registrations


def fetch_registrations(source: RegistrationSource) -> List[Registration]:
    """
    Upstream failures are fatal for the request: 403/404 keep the upstream
    message, anything else becomes a generic 500. No retries.
    """
    try:
        return source.list_registrations()
    except UpstreamAuthError as exc:
        logger.error("Registration source denied access: %s", exc)
        raise HTTPException(status_code=403, detail=str(exc))
    except UpstreamNotFound as exc:
        logger.error("Registration source not found: %s", exc)
        raise HTTPException(status_code=404, detail=str(exc))
    except RegistrationError:
        logger.exception("Failed to fetch registration data")
        raise HTTPException(status_code=500, detail="Failed to fetch registration data")


@router.get("/registrations")
def get_registrations(
    source: RegistrationSource = Depends(get_registration_source),
) -> List[Registration]:
    return fetch_registrations(source)


@router.get("/results")
def get_results(
    request: Request,
    source: RegistrationSource = Depends(get_registration_source),
    voting: VotingService = Depends(get_voting),
) -> Results:
    registrations = fetch_registrations(source)
    try:
        votes = voting.get_tally()["votes"]
    except StorageError:
        logger.exception("Failed to read votes")
        raise HTTPException(status_code=500, detail="Failed to read votes")

    return build_results(registrations, votes, request.app.state.activities)
