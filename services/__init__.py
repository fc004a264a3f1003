"""Services package: game rules, the command state machine and its collaborators.

Only the dependency-free rule modules are re-exported here, since
`models` imports the board from this package. Import the service
layer from its submodules, e.g. `services.game_service`.
"""

from .board import Board, Mark
from .win_checker import WinLine, LineKind, check_win, line_cells
from .drawer import draw

__all__ = [
	"Board",
	"Mark",
	"WinLine",
	"LineKind",
	"check_win",
	"line_cells",
	"draw",
]
