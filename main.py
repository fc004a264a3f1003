from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request

import config
from routes import slack_router
from services.admission import AdmissionGuard
from services.exceptions import MembershipLookupFailed
from services.game_service import TicTacToeService
from services.slack_client import SlackClient
from stores import init_stores, close_stores

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = await init_stores(config.DB_PATH)
    logger.info(f"[STORE] Game store ready at {config.DB_PATH}")

    slack = SlackClient(config.SLACK_API_TOKEN, base_url=config.SLACK_API_URL, timeout=config.SLACK_TIMEOUT)
    await slack.init()
    if config.SLACK_API_TOKEN:
        try:
            await slack.auth_test()
        except MembershipLookupFailed as exc:
            logger.error(f"[SLACK] Token check failed, lookups will fail until fixed: {exc}")
    else:
        logger.warning("[SLACK] SLACK_API_TOKEN is not set; opponent lookups will fail")

    app.state.game_service = TicTacToeService(
        store,
        slack,
        guard=AdmissionGuard(),
        board_size=config.BOARD_SIZE,
    )
    try:
        yield
    finally:
        await slack.close()
        await close_stores()
        logger.info("[STORE] Game store closed")


# --- FastAPI setup ---
app = FastAPI(lifespan=lifespan)


# --- Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f} ms)")
    return response


# --- Register routes ---
app.include_router(slack_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
