from fastapi import APIRouter, Request, HTTPException, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
import secrets
import logging

import config
from models import SlashCommandRequest
from services.command_parser import parse_command
from services.dispatcher import CommandContext, dispatch
from services.game_service import TicTacToeService
from services.slack_format import SlackFormatter

logger = logging.getLogger(__name__)

router = APIRouter()


def get_game_service(request: Request) -> TicTacToeService:
	service = getattr(request.app.state, "game_service", None)
	if service is None:
		raise HTTPException(status_code=503, detail="Service not ready")
	return service


def get_formatter() -> SlackFormatter:
	return SlackFormatter(locale=config.LOCALE, command=config.TTT_COMMAND_NAME)


async def read_slash_command(request: Request) -> SlashCommandRequest:
	"""Parse and check the slash-command body.

	Slack posts application/x-www-form-urlencoded; JSON is accepted too.
	"""
	try:
		if request.headers.get("content-type", "").startswith("application/json"):
			data = await request.json()
		else:
			data = dict(await request.form())
		body = SlashCommandRequest(**data)
	except (ValidationError, ValueError, TypeError) as exc:
		logger.info(f"[SLACK] Rejected request body: {exc}")
		raise HTTPException(status_code=400, detail="Incorrect Post Body!")

	if body.command != f"/{config.TTT_COMMAND_NAME}":
		raise HTTPException(status_code=400, detail="Incorrect Post Body!")

	if not config.TTT_COMMAND_TOKEN or not secrets.compare_digest(body.token.encode(), config.TTT_COMMAND_TOKEN.encode()):
		logger.warning(f"[SLACK] Bad command token from team {body.team_id}")
		raise HTTPException(status_code=400, detail="Incorrect Token!")
	return body


@router.get("/", response_class=PlainTextResponse)
async def ping():
	"""Keep-alive endpoint for uptime checks."""
	return "OK"


@router.post("/")
async def slash_command(
	body: SlashCommandRequest = Depends(read_slash_command),
	service: TicTacToeService = Depends(get_game_service),
	formatter: SlackFormatter = Depends(get_formatter),
):
	logger.info(
		f"[SLACK] {body.command} {body.text!r} from {body.user_name} in {body.team_id}/{body.channel_id}"
	)
	command = parse_command(body.text, body.user_name)
	ctx = CommandContext(
		team_id=body.team_id,
		channel_id=body.channel_id,
		user_id=body.user_id,
		user_name=body.user_name,
		channel_name=body.channel_name,
	)
	result = await dispatch(service, command, ctx)
	response = formatter.format(result)
	return JSONResponse(content=response.model_dump(exclude_none=True))
