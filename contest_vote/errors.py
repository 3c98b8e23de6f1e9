"""Domain errors raised by the store, the voting service and the registration source.

Routers translate these into HTTP responses; nothing below the HTTP layer
knows about status codes.
"""


class VoteError(Exception):
    """A vote request that cannot be accepted."""


class MissingContestant(VoteError):
    def __init__(self, message: str = "Contestant is required"):
        super().__init__(message)


class AlreadyVoted(VoteError):
    def __init__(self, message: str = "You have already voted"):
        super().__init__(message)


class StorageError(Exception):
    """A JSON document could not be read or written."""


class MalformedDocument(StorageError):
    """A JSON document exists but does not have the expected shape."""


class RegistrationError(Exception):
    """The registration source failed."""


class UpstreamAuthError(RegistrationError):
    pass


class UpstreamNotFound(RegistrationError):
    pass
