import logging
import tkinter as tk

from peg_board import Board, HoleState, Position
from peg_config import load_config, setup_logging
from peg_engine import BoardEngine

logger = logging.getLogger(__name__)

# ——— layout constants ———
CELL, R, PAD = 56, 20, 16


def hole_center(pos) -> tuple[float, float]:
    """(row,col) -> canvas coordinates; rows are centred to form a triangle."""
    row, col = pos
    x = PAD + (Board.ROWS - 1 - row) * CELL / 2 + col * CELL + CELL / 2
    y = PAD + row * CELL + CELL / 2
    return x, y


def hole_at(x: float, y: float) -> Position | None:
    """Hole whose circle contains (x, y), or None."""
    row = int((y - PAD) // CELL)
    if not 0 <= row < Board.ROWS:
        return None
    for col in range(row + 1):
        cx, cy = hole_center((row, col))
        if (x - cx) ** 2 + (y - cy) ** 2 <= R ** 2:
            return Position(row, col)
    return None


class PegSolitaireGUI(tk.Frame):
    """Click a peg then an empty hole, or drag a peg onto an empty hole."""

    # ——— colours ———
    PEG, HOLE, OUTL, HILITE = "#FFD600", "#202020", "#333", "#42A5F5"
    BG = "#eeeeee"

    def __init__(self, master, engine: BoardEngine | None = None) -> None:
        super().__init__(master, bg=self.BG)
        self.engine = engine or BoardEngine()
        self.drag_from: Position | None = None
        self.press_at: Position | None = None

        side = Board.ROWS * CELL + 2 * PAD
        self.canvas = tk.Canvas(self, width=side, height=side,
                                bg=self.BG, highlightthickness=0)
        self.canvas.pack()

        self.status = tk.Label(self, font=("Arial", 14), bg=self.BG, anchor="w")
        self.status.pack(pady=4, fill="x")

        # ——— buttons ———
        btns = tk.Frame(self, bg=self.BG)
        btns.pack()
        for txt, cmd in [("↩ Undo", self.on_undo),
                         ("↪ Redo", self.on_redo),
                         ("↻ Restart", self.on_reset)]:
            tk.Button(btns, text=txt, command=cmd).pack(side="left", padx=3)

        self.canvas.bind("<ButtonPress-1>", self.on_press)
        self.canvas.bind("<B1-Motion>", self.on_drag)
        self.canvas.bind("<ButtonRelease-1>", self.on_release)
        master.bind("<Control-z>", lambda e: self.on_undo())
        master.bind("<Control-y>", lambda e: self.on_redo())

        self.redraw()

    # ------------------------------------------------------------------ #
    #                            drawing                                 #
    # ------------------------------------------------------------------ #
    def redraw(self) -> None:
        self.canvas.delete("all")
        board, sel = self.engine.board, self.engine.selected

        for pos in Board.LEGAL_POSITIONS:
            x, y = hole_center(pos)
            fill = self.PEG if board.get(pos) == HoleState.PEG else self.HOLE
            if pos == self.drag_from:
                fill = self.HOLE
            width = 3 if pos == sel else 1
            outline = self.HILITE if pos == sel else self.OUTL
            self.canvas.create_oval(x - R, y - R, x + R, y + R,
                                    fill=fill, outline=outline, width=width)

        # legal targets of the selected peg
        if sel:
            for m in self.engine.legal_moves():
                if m.src == sel:
                    x, y = hole_center(m.dst)
                    self.canvas.create_oval(x - R // 2, y - R // 2, x + R // 2, y + R // 2,
                                            outline=self.HILITE, width=3)
        self._update_status()

    def _update_status(self) -> None:
        if self.engine.is_game_over():
            text = self.engine.message
        else:
            text = f"Pegs: {self.engine.board.count_pegs()} | Moves: {len(self.engine.move_log)}"
        self.status.config(text=text)

    # ------------------------------------------------------------------ #
    #                           pointer input                            #
    # ------------------------------------------------------------------ #
    def on_press(self, e) -> None:
        if self.engine.is_game_over():
            return
        self.press_at = hole_at(e.x, e.y)
        self.drag_from = None   # set once the pointer leaves a pressed peg

    def on_drag(self, e) -> None:
        if self.press_at is None or not self.engine.board.has_peg(self.press_at):
            return
        if self.drag_from is None and hole_at(e.x, e.y) != self.press_at:
            self.drag_from = self.press_at
            self.redraw()
        if self.drag_from:
            self.canvas.delete("ghost")
            self.canvas.create_oval(e.x - R, e.y - R, e.x + R, e.y + R,
                                    fill=self.PEG, outline=self.HILITE, tags="ghost")

    def on_release(self, e) -> None:
        if self.engine.is_game_over():
            return
        target = hole_at(e.x, e.y)
        if self.drag_from is not None:
            if target is not None:
                result = self.engine.attempt_move(self.drag_from, target)
                logger.debug("drag %s -> %s: %s", self.drag_from, target,
                             "ok" if result else result.error.name)
        elif target is not None and target == self.press_at:
            self.on_click(target)
        self.drag_from = self.press_at = None
        self.redraw()

    def on_click(self, pos: Position) -> None:
        if self.engine.board.has_peg(pos):
            self.engine.select_peg(pos)
        elif self.engine.board.is_empty(pos):
            self.engine.move_selected(pos)

    # ——— buttons ———
    def on_undo(self): self._call(self.engine.undo)
    def on_redo(self): self._call(self.engine.redo)
    def on_reset(self): self._call(self.engine.reset)

    def _call(self, fn):
        fn()
        self.drag_from = self.press_at = None
        self.redraw()


def main() -> None:
    setup_logging(load_config()['log_level'])
    root = tk.Tk()
    root.title("Triangle Peg Solitaire")
    PegSolitaireGUI(root).pack()
    root.mainloop()


if __name__ == "__main__":
    main()
