# vote tally + one-vote-per-IP bookkeeping
import logging
import threading
from typing import Dict, Optional

from .config import IP_VOTES_FILE, VOTES_FILE
from .errors import AlreadyVoted, MalformedDocument, MissingContestant
from .store import JsonDocumentStore

logger = logging.getLogger(__name__)


class VotingService:
    """
    Reads and updates the two vote documents:

    - votes.json:    {"votes": {"<fullName>-<activity>": count}}
    - ip-votes.json: {"<client ip>": true}

    cast_vote holds a lock from the duplicate check until both documents are
    written, so two requests from the same IP in this process cannot both pass
    the check. Separate processes sharing a data directory are not coordinated.
    """

    def __init__(self, store: JsonDocumentStore):
        self.store = store
        self._lock = threading.Lock()

    def _read_votes(self) -> Dict[str, object]:
        doc = self.store.read(VOTES_FILE, {"votes": {}})
        votes = doc.get("votes")
        if not isinstance(votes, dict):
            raise MalformedDocument(f"{VOTES_FILE} has no 'votes' object")
        for key, count in votes.items():
            # bool is an int subclass; true/false are not counts
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise MalformedDocument(f"{VOTES_FILE} has invalid count {count!r} for {key!r}")
        return doc

    def _read_ip_votes(self) -> Dict[str, bool]:
        return self.store.read(IP_VOTES_FILE, {})

    def get_tally(self) -> Dict[str, Dict[str, int]]:
        return self._read_votes()

    def has_voted(self, client_ip: str) -> bool:
        return bool(self._read_ip_votes().get(client_ip, False))

    def cast_vote(self, client_ip: str, contestant: Optional[str]) -> int:
        """
        Record one vote for `contestant` from `client_ip`.
        Returns the contestant's new count.
        """
        if not contestant:
            raise MissingContestant()

        with self._lock:
            ip_votes = self._read_ip_votes()
            if ip_votes.get(client_ip):
                logger.info("Rejected second vote from %s for %r", client_ip, contestant)
                raise AlreadyVoted()

            doc = self._read_votes()
            votes = doc["votes"]
            votes[contestant] = votes.get(contestant, 0) + 1
            self.store.write(VOTES_FILE, doc)

            ip_votes[client_ip] = True
            self.store.write(IP_VOTES_FILE, ip_votes)

        logger.info("Vote from %s for %r (now %d)", client_ip, contestant, votes[contestant])
        return votes[contestant]
