import pytest

from services.command_parser import CommandName, parse_command
from services.dispatcher import CommandContext, dispatch
from services.exceptions import MembershipLookupFailed
from services.slack_format import DANGER, GOOD, WARNING, SlackFormatter, user_display
from stores import StoreError

from models.domain_models import Player
from services.game_service import TicTacToeService

from .conftest import ALICE, BOB, CHANNEL, TEAM, StaticResolver


def ctx_for(player, channel_name="general"):
    return CommandContext(TEAM, CHANNEL, player.id, player.name, channel_name)


async def run(service, text, player=ALICE):
    return await dispatch(service, parse_command(text, player.name), ctx_for(player))


@pytest.fixture
def formatter():
    return SlackFormatter()


class TestUserDisplay:

    def test_with_id(self):
        assert user_display(ALICE) == "<@U001|alice>"

    def test_without_id(self):
        assert user_display(Player("alice")) == "@alice"


class TestHelp:

    async def test_requested(self, service, formatter):
        response = formatter.format(await run(service, "help"))
        assert response.response_type == "ephemeral"
        assert response.text.startswith("Let's learn how to use the /ttt command.")
        assert response.attachments[0].title == "Command Usage:"
        assert "`/ttt start @username`" in response.attachments[0].text
        assert response.attachments[0].color == WARNING

    async def test_unknown_command(self, service, formatter):
        response = formatter.format(await run(service, "dance"))
        assert response.text == "You have entered an invalid command!"
        assert response.attachments[0].color == DANGER

    async def test_bad_move(self, service, formatter):
        response = formatter.format(await run(service, "play x"))
        assert response.text == "Invalid move! <index> should be a valid number."

    def test_custom_command_name(self, formatter):
        labels = SlackFormatter(command="tictactoe").labels(CommandName.HELP)
        assert "`/tictactoe status`" in labels["USAGE"]


class TestOutcomes:

    async def test_started(self, service, formatter):
        response = formatter.format(await run(service, "start @bob"))
        assert response.response_type == "in_channel"
        assert response.text == "New Game started in this channel!"
        detail = response.attachments[0].text
        assert detail.startswith("<@U001|alice> has challenged <@U002|bob> to a new game.")
        assert "`X` -> <@U001|alice>" in detail
        assert "`O` -> <@U002|bob>" in detail
        assert "First move by: <@U001|alice>" in detail
        assert detail.endswith("|  `6` |  `7` |  `8` |\n")
        assert response.attachments[0].color == GOOD

    async def test_played(self, service, formatter):
        await run(service, "start @bob")
        response = formatter.format(await run(service, "play 4"))
        assert response.response_type == "in_channel"
        assert response.text == "Well done <@U001|alice> :thumbsup:\n It is now <@U002|bob>'s turn!"
        assert "|  `3` |  X  |  `5` |" in response.attachments[0].text

    async def test_win(self, service, formatter):
        await run(service, "start @bob")
        for text, player in [("play 0", ALICE), ("play 3", BOB), ("play 1", ALICE), ("play 4", BOB)]:
            await run(service, text, player)
        response = formatter.format(await run(service, "play 2"))
        assert response.text == "Game over! <@U001|alice> has won this game! :thumbsup:"
        assert response.attachments[0].text.splitlines()[0] == "|  `X` |  `X` |  `X` |"

    async def test_status(self, service, formatter):
        await run(service, "start @bob")
        response = formatter.format(await run(service, "status", BOB))
        assert response.response_type == "ephemeral"
        assert response.text == "Game status:"
        assert "It is now <@U001|alice>'s turn!" in response.attachments[0].text

    async def test_history(self, service, formatter):
        await run(service, "start @bob")
        await run(service, "play 8")
        response = formatter.format(await run(service, "history"))
        assert response.text == "Game is currently being played between <@U001|alice> and <@U002|bob>"
        first_line = response.attachments[0].text.splitlines()[0]
        assert first_line == (
            "1. <@U001|alice> placed an `X` at location `8` at `Tue, 04 Oct 2016 18:02:11 GMT`"
        )

    async def test_history_before_any_move(self, service, formatter):
        await run(service, "start @bob")
        response = formatter.format(await run(service, "history"))
        assert response.attachments[0].text.startswith("No moves have been played yet.")

    async def test_ended(self, service, formatter):
        await run(service, "start @bob")
        response = formatter.format(await run(service, "end", BOB))
        assert response.response_type == "in_channel"
        assert response.text == "Game between <@U001|alice> and <@U002|bob> has been ended!"


class TestFailures:

    async def test_no_game(self, service, formatter):
        response = formatter.format(await run(service, "status"))
        assert response.response_type == "ephemeral"
        assert response.text.startswith("No game is being played in this channel!")
        assert "`/ttt start @username`" in response.text

    async def test_invalid_opponent(self, service, formatter):
        response = formatter.format(await run(service, "start @mallory"))
        assert response.text == "Unable to start the game!"
        assert response.attachments[0].text == (
            "Invalid username given!! `@mallory` is not a member of <#C001|general>"
        )

    async def test_already_playing(self, service, formatter):
        await run(service, "start @bob")
        response = formatter.format(await run(service, "start @alice", BOB))
        assert response.attachments[0].text == "Game already started in this channel!"

    async def test_wrong_turn(self, service, formatter):
        await run(service, "start @bob")
        response = formatter.format(await run(service, "play 0", BOB))
        assert response.text == "You are not allowed to make a move!"
        assert response.attachments[0].text == "Patience! It is <@U001|alice>'s turn!"

    async def test_occupied_cell(self, service, formatter):
        await run(service, "start @bob")
        await run(service, "play 0")
        response = formatter.format(await run(service, "play 0", BOB))
        assert response.text == "That is an invalid move!"
        assert "`/ttt play <index>`" in response.attachments[0].text

    async def test_end_by_outsider(self, service, formatter):
        await run(service, "start @bob")
        carol = Player("carol", "U003")
        response = formatter.format(await run(service, "end", carol))
        assert response.text == "This game cannot be ended by you!"
        assert response.attachments[0].text == (
            "Only players of this game (<@U001|alice> and <@U002|bob>) can end the game!"
        )

    async def test_channel_error(self, store, formatter):
        class BrokenResolver(StaticResolver):
            async def resolve_member(self, user_name, channel_id):
                raise MembershipLookupFailed("conversations.members returned not_in_channel", code="not_in_channel")

        service = TicTacToeService(store, BrokenResolver({}))
        response = formatter.format(await run(service, "start @bob"))
        assert response.text == "Unable to start the game!"
        assert response.attachments[0].text == "Please run this command from a valid channel"

    async def test_store_fault(self, service, store, formatter):
        async def broken_lookup(criteria):
            raise StoreError("disk I/O error")

        store.lookup = broken_lookup
        response = formatter.format(await run(service, "status"))
        assert response.text == "Something went wrong! Please try again later."
        assert response.attachments == []
