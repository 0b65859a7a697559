from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from peg_board import Board, HoleState, Position, PosLike

logger = logging.getLogger(__name__)


class Move(NamedTuple):
    src: Position
    dst: Position
    over: Position


class MoveError(Enum):
    INVALID_TARGET = "invalid_target"          # off-board or occupied
    INVALID_SOURCE = "invalid_source"          # off-board or no peg
    NOT_A_JUMP = "not_a_jump"
    NO_PEG_TO_CAPTURE = "no_peg_to_capture"


class Verdict(Enum):
    NONE = "none"
    WIN = "win"
    LOSE = "lose"


class Status(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


WIN_MESSAGE = "You win!"
LOSE_MESSAGE = "You lose!"
NO_MOVES_MESSAGE = "No more valid moves. You lose!"


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of attempt_move().
    On failure `error` is set and `move`/`verdict` stay at their defaults.
    """
    board: Board
    error: Optional[MoveError] = None
    move: Optional[Move] = None
    verdict: Verdict = Verdict.NONE
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


class BoardEngine:
    """
    Peg-Solitaire rules engine for the triangular board.
    • validation and application of jumps
    • win / lose detection after every move
    • full-board snapshot history with undo/redo
    """

    # (drow, dcol) of a jump; the captured peg sits at half the offset
    DIRECTIONS: List[Tuple[int, int]] = [
        (-2, 0), (2, 0), (0, -2), (0, 2), (-2, -2), (2, 2),
    ]

    def __init__(self, board: Optional[Board] = None) -> None:
        self.board: Board = Board()
        self.selected: Optional[Position] = None
        self._history: List[Board] = []
        self._moves: List[Move] = []
        self._redo: List[Move] = []
        self.verdict: Verdict = Verdict.NONE
        self.message: str = ""
        self.reset(board)

    # ---------------- lifecycle -----------------------------------------
    def reset(self, board: Optional[Board] = None) -> None:
        self.board = board.copy() if board else Board()
        self.selected = None
        self._history = [self.board.copy()]
        self._moves.clear()
        self._redo.clear()
        self.verdict, self.message = Verdict.NONE, ""
        logger.info("board reset (%d pegs)", self.board.count_pegs())

    # ---------------- selection (click mode) -----------------------------
    def select_peg(self, pos: PosLike) -> bool:
        if not self.board.has_peg(pos):
            return False
        self.selected = Position(*pos)
        return True

    def clear_selection(self) -> None:
        self.selected = None

    def move_selected(self, dst: PosLike) -> Optional[MoveResult]:
        if self.selected is None:
            return None
        return self.attempt_move(self.selected, dst)

    # ---------------- rules ---------------------------------------------
    @staticmethod
    def _middle(a: Position, b: Position) -> Position:
        return Position((a[0] + b[0]) // 2, (a[1] + b[1]) // 2)

    @classmethod
    def check_jump(cls, board: Board, src: PosLike, dst: PosLike) -> Tuple[Optional[MoveError], Optional[Position]]:
        """Returns (error, over); error is None for a legal jump on `board`."""
        src, dst = Position(*src), Position(*dst)
        if not board.is_empty(dst):
            return MoveError.INVALID_TARGET, None
        if not board.has_peg(src):
            return MoveError.INVALID_SOURCE, None
        if (dst.row - src.row, dst.col - src.col) not in cls.DIRECTIONS:
            return MoveError.NOT_A_JUMP, None
        over = cls._middle(src, dst)
        if not Board.is_valid(over):
            return MoveError.NOT_A_JUMP, None
        if not board.has_peg(over):
            return MoveError.NO_PEG_TO_CAPTURE, None
        return None, over

    def check_move(self, src: PosLike, dst: PosLike) -> Tuple[Optional[MoveError], Optional[Position]]:
        return self.check_jump(self.board, src, dst)

    def _jumps_from(self, src: Position):
        for dr, dc in self.DIRECTIONS:
            dst = Position(src.row + dr, src.col + dc)
            over = Position(src.row + dr // 2, src.col + dc // 2)
            if self.board.is_empty(dst) and self.board.has_peg(over):
                yield Move(src, dst, over)

    def legal_moves(self) -> List[Move]:
        return [m for src in self.board.all_pegs() for m in self._jumps_from(src)]

    def has_valid_moves(self) -> bool:
        return any(True for src in self.board.all_pegs() for _ in self._jumps_from(src))

    # ---------------- moves ---------------------------------------------
    def _apply(self, move: Move) -> None:
        self.board.set(move.src, HoleState.EMPTY)
        self.board.set(move.over, HoleState.EMPTY)
        self.board.set(move.dst, HoleState.PEG)
        self._history.append(self.board.copy())
        self._moves.append(move)
        self.selected = None
        self.verdict, self.message = self.evaluate()
        if self.verdict is not Verdict.NONE:
            logger.info("game over: %s", self.message)

    def attempt_move(self, src: PosLike, dst: PosLike) -> MoveResult:
        error, over = self.check_move(src, dst)
        if error is not None:
            logger.debug("rejected %s -> %s: %s", tuple(src), tuple(dst), error.name)
            return MoveResult(board=self.board.copy(), error=error)

        move = Move(Position(*src), Position(*dst), over)
        self._redo.clear()
        self._apply(move)
        logger.debug("move %s -> %s over %s, %d pegs left",
                     move.src, move.dst, move.over, self.board.count_pegs())
        return MoveResult(board=self.board.copy(), move=move,
                          verdict=self.verdict, message=self.message)

    def undo(self) -> bool:
        if len(self._history) <= 1:
            return False
        self._history.pop()
        self.board = self._history[-1].copy()
        self._redo.append(self._moves.pop())
        self.selected = None
        self.verdict, self.message = Verdict.NONE, ""
        logger.debug("undo -> %d pegs", self.board.count_pegs())
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._apply(self._redo.pop())
        logger.debug("redo -> %d pegs", self.board.count_pegs())
        return True

    # ---------------- terminal state ------------------------------------
    def evaluate(self) -> Tuple[Verdict, str]:
        pegs = self.board.all_pegs()
        if len(pegs) == 1:
            if pegs[0] == Board.CENTER:
                return Verdict.WIN, WIN_MESSAGE
            return Verdict.LOSE, LOSE_MESSAGE
        if len(pegs) > 1 and not self.has_valid_moves():
            return Verdict.LOSE, NO_MOVES_MESSAGE
        return Verdict.NONE, ""

    @property
    def status(self) -> Status:
        return {Verdict.NONE: Status.PLAYING,
                Verdict.WIN: Status.WON,
                Verdict.LOSE: Status.LOST}[self.verdict]

    def is_game_over(self) -> bool: return self.verdict is not Verdict.NONE
    def is_win(self) -> bool:       return self.verdict is Verdict.WIN

    # ---------------- history views --------------------------------------
    @property
    def history(self) -> Tuple[Board, ...]:
        return tuple(b.copy() for b in self._history)

    @property
    def move_log(self) -> List[Move]:
        return list(self._moves)

    @property
    def redo_log(self) -> List[Move]:
        return list(self._redo)

    @property
    def can_undo(self) -> bool: return len(self._history) > 1
    @property
    def can_redo(self) -> bool: return bool(self._redo)

    def restore(self, seed: Board, moves, redo=(), selected: Optional[PosLike] = None) -> None:
        """
        Rebuild a game by replaying `moves` (each a (src, dst) pair) from `seed`.
        `redo` is the redo stack, last entry redone first.
        Raises ValueError if any move is illegal along the way.
        """
        self.reset(seed)
        redo = list(redo)
        for src, dst, *_ in list(moves) + redo[::-1]:
            result = self.attempt_move(src, dst)
            if not result:
                raise ValueError(f"cannot replay {tuple(src)} -> {tuple(dst)}: {result.error.name}")
        for _ in redo:
            self.undo()
        if selected is not None:
            self.select_peg(selected)

    def __str__(self) -> str:
        return f"{self.board}\n{self.status.value}: {self.board.count_pegs()} pegs"
