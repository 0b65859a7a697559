from __future__ import annotations
from enum import IntEnum
from typing import Dict, Iterable, List, NamedTuple, Optional, Union

import numpy as np


class Position(NamedTuple):
    """(row, col) of a hole; col runs 0..row."""
    row: int
    col: int


PosLike = Union[Position, tuple]


class HoleState(IntEnum):
    EMPTY = 0
    PEG = 1


class Board:
    """
    Triangular Peg-Solitaire board, 8 rows (36 holes).
    Only state management: move legality lives in BoardEngine.
    """

    __slots__ = ("state",)

    # --- geometry -------------------------------------------------------
    ROWS: int = 8
    CENTER: Position = Position(4, 2)
    LEGAL_POSITIONS: List[Position] = [
        Position(r, c) for r in range(ROWS) for c in range(r + 1)
    ]
    _LEGAL_SET = frozenset(LEGAL_POSITIONS)

    TOTAL_PEGS: int = len(LEGAL_POSITIONS) - 1     # center empty

    # -------------------------------------------------------------------
    def __init__(self) -> None:
        self.state: Dict[Position, HoleState] = {}
        self.reset()

    @classmethod
    def is_valid(cls, pos: PosLike) -> bool:
        return tuple(pos) in cls._LEGAL_SET

    # ---------------- basics --------------------------------------------
    def reset(self) -> None:
        for p in self.LEGAL_POSITIONS:
            self.state[p] = HoleState.PEG
        self.state[self.CENTER] = HoleState.EMPTY

    def get(self, pos: PosLike) -> Optional[HoleState]:
        return self.state.get(Position(*pos))

    def set(self, pos: PosLike, val: HoleState) -> None:
        pos = Position(*pos)
        if pos not in self._LEGAL_SET or val not in (HoleState.EMPTY, HoleState.PEG):
            raise ValueError(f"illegal {pos=}/{val=}")
        self.state[pos] = HoleState(val)

    def has_peg(self, pos: PosLike) -> bool:   return self.get(pos) == HoleState.PEG
    def is_empty(self, pos: PosLike) -> bool:  return self.get(pos) == HoleState.EMPTY

    def all_pegs(self) -> List[Position]:  return [p for p, v in self.state.items() if v]
    def all_holes(self) -> List[Position]: return [p for p, v in self.state.items() if not v]
    def count_pegs(self) -> int:           return sum(self.state.values())

    # ---------------- alternate constructors -----------------------------
    @classmethod
    def empty(cls) -> "Board":
        b = cls()
        for p in cls.LEGAL_POSITIONS:
            b.state[p] = HoleState.EMPTY
        return b

    @classmethod
    def from_pegs(cls, pegs: Iterable[PosLike]) -> "Board":
        """Board holding pegs exactly at the given positions."""
        b = cls.empty()
        for p in pegs:
            b.set(p, HoleState.PEG)
        return b

    @classmethod
    def from_array(cls, data) -> "Board":
        arr = np.asarray(data)
        if arr.shape != (cls.ROWS, cls.ROWS):
            raise ValueError(f"state array must be ({cls.ROWS},{cls.ROWS})")
        b = cls.empty()
        for p in cls.LEGAL_POSITIONS:
            if arr[p] not in (0, 1):
                raise ValueError(f"illegal value {arr[p]} at {p}")
            b.state[p] = HoleState(int(arr[p]))
        return b

    @classmethod
    def from_list(cls, values: Iterable[int]) -> "Board":
        """Inverse of to_list(): hole states in LEGAL_POSITIONS order."""
        values = list(values)
        if len(values) != len(cls.LEGAL_POSITIONS):
            raise ValueError(f"expected {len(cls.LEGAL_POSITIONS)} values, got {len(values)}")
        b = cls.empty()
        for p, v in zip(cls.LEGAL_POSITIONS, values):
            b.set(p, HoleState(v))
        return b

    # ---------------- array / list --------------------------------------
    def as_array(self) -> np.ndarray:
        """ROWS x ROWS grid: 1 = peg, 0 = empty, -1 = no hole."""
        arr = np.full((self.ROWS, self.ROWS), -1, dtype=np.int8)
        for p in self.LEGAL_POSITIONS:
            arr[p] = int(self.state[p])
        return arr

    def to_list(self) -> List[int]:
        return [int(self.state[p]) for p in self.LEGAL_POSITIONS]

    # ---------------- copy / compare -------------------------------------
    def copy(self) -> "Board":
        b = Board.__new__(Board)
        b.state = self.state.copy()
        return b

    def __hash__(self) -> int: return hash(tuple(self.to_list()))
    def __eq__(self, o: object) -> bool:
        return isinstance(o, Board) and o.state == self.state

    def __repr__(self) -> str:
        return f"Board(pegs={self.count_pegs()})"

    def __str__(self) -> str:
        rows = []
        for r in range(self.ROWS):
            cells = " ".join("●" if self.state[(r, c)] else "◯" for c in range(r + 1))
            rows.append(" " * (self.ROWS - 1 - r) + cells)
        return "\n".join(rows)
