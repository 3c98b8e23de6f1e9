# client-facing vote endpoints
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from .config import CLIENT_IP_HEADER, UNKNOWN_CLIENT
from .errors import AlreadyVoted, MissingContestant, StorageError
from .models import Tally, VoteIn, VoteResult, VoteStatus
from .voting import VotingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def client_ip(request: Request) -> str:
    """
    Voter identity: the forwarding header exactly as received (a proxy chain
    "a, b" is one identity), or "unknown" when the header is missing.
    """
    return request.headers.get(CLIENT_IP_HEADER) or UNKNOWN_CLIENT


def get_voting(request: Request) -> VotingService:
    return request.app.state.voting


@router.get("/votes")
def get_votes(voting: VotingService = Depends(get_voting)) -> Tally:
    try:
        return Tally(**voting.get_tally())
    except StorageError:
        logger.exception("Failed to read votes")
        raise HTTPException(status_code=500, detail="Failed to read votes")


@router.post("/votes")
def post_vote(
    v: VoteIn,
    ip: str = Depends(client_ip),
    voting: VotingService = Depends(get_voting),
) -> VoteResult:
    try:
        voting.cast_vote(ip, v.contestant)
    except MissingContestant as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except AlreadyVoted as exc:
        raise HTTPException(status_code=403, detail=str(exc))
    except StorageError:
        logger.exception("Failed to record vote")
        raise HTTPException(status_code=500, detail="Failed to record vote")

    return VoteResult(success=True, message="Vote recorded successfully")


@router.get("/check-vote")
def check_vote(
    ip: str = Depends(client_ip),
    voting: VotingService = Depends(get_voting),
) -> VoteStatus:
    try:
        return VoteStatus(hasVoted=voting.has_voted(ip))
    except StorageError:
        logger.exception("Failed to check vote status")
        raise HTTPException(status_code=500, detail="Failed to check vote status")
