"""Pydantic request/response models for the slash-command endpoint.

Keep transport concerns (validation, docs) here and keep business/domain
types in `models.domain_models`.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class SlashCommandRequest(BaseModel):
	"""Body Slack posts for every `/ttt` invocation."""
	token: str
	team_id: str
	channel_id: str
	channel_name: str
	user_id: str
	user_name: str
	command: str
	text: str = ""
	team_domain: str | None = None
	response_url: str | None = None


class SlackAttachment(BaseModel):
	text: str
	title: str | None = None
	color: str | None = None
	mrkdwn_in: list[str] = Field(default_factory=lambda: ["text"])


class SlackResponse(BaseModel):
	text: str
	response_type: str = "in_channel"
	attachments: list[SlackAttachment] = Field(default_factory=list)


__all__ = [
	"SlashCommandRequest",
	"SlackAttachment",
	"SlackResponse",
]
