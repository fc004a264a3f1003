"""User-facing message templates, per locale and command.

Templates use `str.format` placeholders. `get_locale` falls back to US
English for unknown locale names.
"""
from types import MappingProxyType

from .command_parser import CommandName

DB_ERROR = "Something went wrong! Please try again later."
GAME_NOT_FOUND_ERROR = (
    "No game is being played in this channel!\n"
    "Start a game using `/{command} start @username`"
)

US_EN = {
    CommandName.START: {
        "DB_ERROR": DB_ERROR,
        "CHANNEL_ERROR": "Unable to start the game!",
        "CHANNEL_DETAIL_ERROR": "Please run this command from a valid channel",
        "USER_ERROR": "Unable to start the game!",
        "USER_DETAIL_ERROR": "Invalid username given!! `@{user}` is not a member of <#{channel_id}|{channel_name}>",
        "SAME_USER_ERROR": "You cannot play the game with yourself!",
        "GAME_START_ERROR": "Game already started in this channel!",
        "GAME_SYNC_ERROR": "Game being created in this channel!",
        "CMD_TEXT": "New Game started in this channel!",
        "CMD_DETAIL_TEXT": "{challenger} has challenged {challenged} to a new game.",
    },
    CommandName.PLAY: {
        "DB_ERROR": DB_ERROR,
        "GAME_NOT_FOUND_ERROR": GAME_NOT_FOUND_ERROR,
        "MOVE_ERROR": "Invalid move! <index> should be a valid number.",
        "USER_ERROR": "You are not allowed to make a move!",
        "USER_DETAIL_ERROR": "Only players of this game ({first} and {second}) can play the game!",
        "TURN_ERROR": "Patience! It is {player}'s turn!",
        "CMD_ERROR": "That is an invalid move!",
        "CMD_DETAIL_ERROR": "Please make your move in one of the available cells, using `/{command} play <index>`",
        "WIN_TEXT": "Game over! {player} has won this game! :thumbsup:",
        "TIE_TEXT": "Game over! We have a TIE",
        "NEXT_TURN_TEXT": "Well done {player} :thumbsup:\n It is now {next_player}'s turn!",
    },
    CommandName.STATUS: {
        "DB_ERROR": DB_ERROR,
        "GAME_NOT_FOUND_ERROR": GAME_NOT_FOUND_ERROR,
        "CMD_TEXT": "Game status:",
        "CMD_STATUS_TEXT": "Game is currently being played between {first} and {second}\nIt is now {player}'s turn!",
    },
    CommandName.HISTORY: {
        "DB_ERROR": DB_ERROR,
        "GAME_NOT_FOUND_ERROR": GAME_NOT_FOUND_ERROR,
        "HISTORY_NOT_FOUND_ERROR": "No moves have been played yet.",
        "HISTORY_LINE": "{number}. {player} placed an `{symbol}` at location `{move}` at `{time}`",
        "CMD_STATUS_TEXT": "Game is currently being played between {first} and {second}",
        "CMD_STATUS_TURN_TEXT": "It is now {player}'s turn!",
    },
    CommandName.END: {
        "DB_ERROR": DB_ERROR,
        "GAME_NOT_FOUND_ERROR": GAME_NOT_FOUND_ERROR,
        "CMD_ERROR": "This game cannot be ended by you!",
        "CMD_DETAIL_ERROR": "Only players of this game ({first} and {second}) can end the game!",
        "CMD_SUCCESS": "Game between {first} and {second} has been ended!",
    },
    CommandName.HELP: {
        "CMD_TEXT": (
            "Let's learn how to use the /{command} command.\n"
            "/{command} command can be used to play TicTacToe with other users "
            "in a channel! At a time only one game can be played in a channel."
        ),
        "INVALID_COMMAND": "You have entered an invalid command!",
        "USAGE_TITLE": "Command Usage:",
        "USAGE": (
            "1. Start a game with another user using `/{command} start @username`. "
            "This will randomly pick a player to make the first move.\n"
            "2. To make a move at board cell 'index' in the ongoing game, enter `/{command} play <index>`\n"
            "3. Want to get the status of the game? Enter `/{command} status`\n"
            "4. Who played what? When? Enter `/{command} history`\n"
            "5. End the game using `/{command} end`\n"
            "6. Stuck? Need help? Enter `/{command} help`"
        ),
    },
}

LOCALES = MappingProxyType({"US_EN": US_EN})


def get_locale(name: str) -> dict:
    return LOCALES.get(name.upper(), US_EN)
