"""Data models used by the application.

Split into:
- `api_models`: Pydantic models used for request/response validation
- `domain_models`: the persisted game record and its parts

Import submodules to make them available as `models.api_models`.
"""

from . import api_models, domain_models

from .api_models import (
	SlashCommandRequest,
	SlackAttachment,
	SlackResponse,
)

from .domain_models import (
	GameState,
	Player,
	HistoryEntry,
	Game,
)

__all__ = [
	# submodules
	"api_models",
	"domain_models",
	# api models
	"SlashCommandRequest",
	"SlackAttachment",
	"SlackResponse",
	# domain models
	"GameState",
	"Player",
	"HistoryEntry",
	"Game",
]
