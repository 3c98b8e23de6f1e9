from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class VoteIn(BaseModel):
    # optional so that a missing contestant is reported as 400, not 422
    contestant: Optional[str] = Field(None, examples=["Alice-Dance"])


class VoteResult(BaseModel):
    success: bool
    message: str


class VoteStatus(BaseModel):
    hasVoted: bool


class Tally(BaseModel):
    """
    Vote tally document:
    votes[composite key] = count, composite key = "<fullName>-<activity>"
    """
    votes: Dict[str, int] = Field(default_factory=dict)


class Registration(BaseModel):
    """
    One row of the registration form responses.
    """
    timestamp: str = ""
    fullName: str = Field(..., examples=["Alice"])
    department: str = ""
    activity: str = Field("", examples=["Dance"])
    imageUrl: str = ""

    @property
    def key(self) -> str:
        return f"{self.fullName}-{self.activity}"


class ContestantResult(BaseModel):
    fullName: str
    department: str
    activity: str
    imageUrl: str
    votes: int
    percentage: float


class ActivityResult(BaseModel):
    title: str
    votes: int
    percentage: float
    contestantCount: int
    contestants: List[ContestantResult]


class Results(BaseModel):
    totalVotes: int
    activities: List[ActivityResult]
