"""HTTP route modules (FastAPI routers) for the application.

This file explicitly exports the router objects provided by each
submodule so callers can do:

	from routes import slack_router
	app.include_router(slack_router)

Submodules should expose an `APIRouter` named `router`.
"""

from .slack import router as slack_router

__all__ = [
	"slack_router",
]
