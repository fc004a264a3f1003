"""
Game-level exception definitions.

Every failure a command can end in is one of these. The `category`
attribute groups them the way the response layer treats them:

- validation     malformed arguments or an illegal move; answered with usage help
- not_found      no game is being played in the channel; answered with guidance
- authorization  wrong actor or wrong turn; answered naming the expected player(s)
- conflict       a game already exists or is being created; answered with a retry hint
- store          persistence or transport fault; logged, answered with "try again later"

`retryable` follows the same convention as the store exceptions.
"""


class TicTacToeError(Exception):
    """Base exception for all command failures."""
    category: str = "store"
    retryable: bool = False


# =========================
# Validation
# =========================

class ValidationError(TicTacToeError):
    category = "validation"


class InvalidBoard(ValidationError):
    """A cell sequence whose length is not a perfect square."""


class InvalidMove(ValidationError):
    def __init__(self, index, message=None):
        self.index = index
        super().__init__(message or f"Invalid move at index {index}")


class OutOfRange(InvalidMove):
    def __init__(self, index, length):
        self.length = length
        super().__init__(index, f"Index {index} is outside the board [0, {length})")


class CellOccupied(InvalidMove):
    def __init__(self, index):
        super().__init__(index, f"Cell {index} is already taken")


class SelfChallenge(ValidationError):
    pass


class InvalidOpponent(ValidationError):
    def __init__(self, user_name, channel_id):
        self.user_name = user_name
        self.channel_id = channel_id
        super().__init__(f"@{user_name} is not a member of channel {channel_id}")


# =========================
# Not found
# =========================

class NotFoundError(TicTacToeError):
    category = "not_found"


class GameNotFound(NotFoundError):
    def __init__(self, team_id, channel_id):
        self.team_id = team_id
        self.channel_id = channel_id
        super().__init__(f"No game is being played in {team_id}/{channel_id}")


# =========================
# Authorization
# =========================

class AuthorizationError(TicTacToeError):
    category = "authorization"


class NotAPlayer(AuthorizationError):
    def __init__(self, actor, players):
        self.actor = actor
        self.players = list(players)
        names = " and ".join(p.name for p in self.players)
        super().__init__(f"{actor} is not one of the players ({names})")


class NotYourTurn(AuthorizationError):
    def __init__(self, actor, expected):
        self.actor = actor
        self.expected = expected
        super().__init__(f"It is {expected.name}'s turn, not {actor}'s")


# =========================
# Conflict
# =========================

class ConflictError(TicTacToeError):
    category = "conflict"
    retryable = True


class AlreadyPlaying(ConflictError):
    retryable = False

    def __init__(self, team_id, channel_id):
        self.team_id = team_id
        self.channel_id = channel_id
        super().__init__(f"A game is already being played in {team_id}/{channel_id}")


class CreationInProgress(ConflictError):
    def __init__(self, team_id, channel_id):
        self.team_id = team_id
        self.channel_id = channel_id
        super().__init__(f"A game is being created in {team_id}/{channel_id}")


# =========================
# Transport
# =========================

class MembershipLookupFailed(TicTacToeError):
    """The chat platform could not answer a membership query."""
    category = "store"
    retryable = True

    def __init__(self, message, code=None):
        self.code = code
        super().__init__(message)
