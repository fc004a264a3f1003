import os
from pathlib import Path

from dotenv import load_dotenv

# Values in a local .env file are loaded into the process environment first;
# anything already exported wins.
load_dotenv()

# Path to the SQLite database file used by the game store. Can be overridden
# using the TTT_DB_PATH environment variable.
DB_PATH = os.environ.get("TTT_DB_PATH", str(Path(__file__).parent / "ttt.sqlite3"))

# Slack bot token used for user/channel membership lookups.
SLACK_API_TOKEN = os.environ.get("SLACK_API_TOKEN", "")
SLACK_API_URL = os.environ.get("SLACK_API_URL", "https://slack.com/api")
SLACK_TIMEOUT = float(os.environ.get("SLACK_TIMEOUT", "10"))

# Shared secret Slack sends with every /ttt invocation.
TTT_COMMAND_TOKEN = os.environ.get("TTT_COMMAND_TOKEN", "")
TTT_COMMAND_NAME = os.environ.get("TTT_COMMAND_NAME", "ttt")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOCALE = os.environ.get("TTT_LOCALE", "US_EN")
BOARD_SIZE = int(os.environ.get("TTT_BOARD_SIZE", "3"))
