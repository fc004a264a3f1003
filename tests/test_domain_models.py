import pytest

from models.domain_models import Game, GameState, HistoryEntry, Player
from services.board import Board, Mark
from services.win_checker import Column

from .conftest import ALICE, BOB, CAROL, CHANNEL, FIXED_NOW, TEAM


def new_game():
    return Game.new(TEAM, CHANNEL, ALICE, BOB, challenger="bob")


class TestGame:

    def test_new(self):
        game = new_game()
        assert game.state is GameState.STARTED
        assert game.current == ALICE
        assert game.turn_index == 0
        assert game.mark_of("alice") is Mark.X
        assert game.mark_of("bob") is Mark.O
        assert game.other_player("alice") == BOB
        assert game.start_player == "bob"
        assert game.board == Board.empty()

    def test_players_must_be_distinct(self):
        with pytest.raises(ValueError):
            Game.new(TEAM, CHANNEL, ALICE, Player("alice", "U999"))

    def test_current_player_must_play(self):
        with pytest.raises(ValueError):
            new_game().evolve(current_player=CAROL.name)

    def test_winner_only_with_win_state(self):
        with pytest.raises(ValueError):
            new_game().evolve(winner="alice")
        with pytest.raises(ValueError):
            new_game().evolve(state=GameState.WIN)
        assert new_game().evolve(state=GameState.WIN, winner="bob").winner == "bob"

    def test_terminal_states(self):
        assert not GameState.STARTED.is_terminal
        assert all(s.is_terminal for s in (GameState.WIN, GameState.TIE, GameState.NORESULT))

    def test_document_keys(self):
        doc = new_game().to_document()
        assert doc == {
            "teamId": TEAM,
            "channelId": CHANNEL,
            "startPlayer": "bob",
            "players": [{"id": "U001", "name": "alice"}, {"id": "U002", "name": "bob"}],
            "currentPlayer": "alice",
            "winner": None,
            "board": [0] * 9,
            "state": "STARTED",
            "history": [],
            "winLine": None,
        }

    def test_document_round_trip_of_finished_game(self):
        game = new_game().evolve(
            board=Board([1, 2, 0, 1, 2, 0, 1, 0, 0]),
            history=(HistoryEntry("alice", 0, FIXED_NOW),),
            state=GameState.WIN,
            winner="alice",
            win_line=Column(0),
        )
        restored = Game.from_document(game.to_document(), id=7)
        assert restored == game.evolve(id=7)

    def test_history_time_is_utc_iso(self):
        entry = HistoryEntry("alice", 4, FIXED_NOW)
        assert entry.to_dict() == {"player": "alice", "move": 4, "time": "2016-10-04T18:02:11+00:00"}
