from __future__ import annotations

from typing import List, Optional

import pyqtgraph as pg
from pyqtgraph.Qt import QtWidgets

from game import Game, Snapshot, StaveView
from layout import CLEF_LINE, TOP_LINE, ledger_offsets, signature_offsets, staff_offset
from music import Accidental, Clef, KeySignatureKind
from notation import NoteState

STEP = 0.5  # vertical distance between a line and the next space
STAVE_SPACING = 11.0
CLEF_X = 0.6
SIGNATURE_X = 1.8
SIGNATURE_GAP = 0.55
MEASURE_START_X = 6.0
MEASURE_PAD = 1.2
NOTE_GAP = 2.0
NOTE_WIDTH = 1.1
NOTE_HEIGHT = 0.9
LEDGER_HALF_WIDTH = 0.9

ACCIDENTAL_GLYPHS = {
    Accidental.SHARP: "♯",
    Accidental.FLAT: "♭",
    Accidental.NATURAL: "♮",
}
SIGNATURE_GLYPHS = {
    KeySignatureKind.SHARP: ACCIDENTAL_GLYPHS[Accidental.SHARP],
    KeySignatureKind.FLAT: ACCIDENTAL_GLYPHS[Accidental.FLAT],
}
CLEF_GLYPHS = {
    Clef.TREBLE: "G",
    Clef.BASS: "F",
}


class Theme:
    def __init__(self, dark: bool = True) -> None:
        self.dark = dark
        self.bg = "#0f1118" if dark else "#fbfaf6"
        self.ink = "#e8ebf2" if dark else "#111111"
        self.staff = "#8c93a3" if dark else "#333333"
        self.axis = "#dfe3ec" if dark else "#222222"
        self.state_colors = {
            NoteState.DEFAULT: self.ink,
            NoteState.CURRENT: "#8e96a8",
            NoteState.CORRECT: "#7bdcb5",
            NoteState.INCORRECT: "#e06666",
        }

    def color_for_state(self, state: NoteState) -> str:
        return self.state_colors[state]


def stave_width(stave: StaveView) -> float:
    return MEASURE_START_X + sum(MEASURE_PAD + NOTE_GAP * len(m) for m in stave.measures)


class Visual(QtWidgets.QWidget):
    """Polls the game once per frame and redraws the staves when they changed."""

    def __init__(self, game: Game, theme: Theme) -> None:
        super().__init__()
        self.game = game
        self.theme = theme
        self.items: List[QtWidgets.QGraphicsItem] = []
        self.last_snapshot: Optional[Snapshot] = None

        layout = QtWidgets.QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(layout)

        self.plot = pg.PlotWidget(background=self.theme.bg)
        self.plot.setFrameShape(QtWidgets.QFrame.NoFrame)
        self.plot.setStyleSheet("border: 0px;")
        self.plot.setMouseEnabled(x=False, y=False)
        self.plot.showGrid(x=False, y=False)
        self.plot.setMenuEnabled(False)
        self.plot.getPlotItem().hideButtons()
        self.plot.getPlotItem().getViewBox().setBorder(None)
        self.plot.getPlotItem().hideAxis("left")
        self.plot.getPlotItem().hideAxis("bottom")
        self.plot.getPlotItem().layout.setContentsMargins(0, 0, 0, 0)
        self.plot.getPlotItem().setDefaultPadding(0)
        self.plot.setAspectLocked(True)
        layout.addWidget(self.plot)

        self.score_banner = pg.TextItem(
            html=f"<span style='color:{self.theme.axis}; font-size:16pt; font-weight:bold;'>0/0</span>",
            anchor=(0.0, 0.0),
        )
        self.score_banner.setZValue(3)
        self.plot.addItem(self.score_banner)

    def _add(self, item: QtWidgets.QGraphicsItem) -> None:
        self.plot.addItem(item)
        self.items.append(item)

    def _text(self, text: str, x: float, y: float, color: str, size: int = 14, anchor=(0.5, 0.5)) -> None:
        item = pg.TextItem(
            html=f"<span style='color:{color}; font-size:{size}pt;'>{text}</span>",
            anchor=anchor,
        )
        item.setPos(x, y)
        item.setZValue(2)
        self._add(item)

    def _hline(self, x0: float, x1: float, y: float, color: str, width: float = 1.5) -> None:
        line = QtWidgets.QGraphicsLineItem(x0, y, x1, y)
        pen = pg.mkPen(color, width=width)
        pen.setCosmetic(True)
        line.setPen(pen)
        self._add(line)

    def _vline(self, x: float, y0: float, y1: float, color: str, width: float = 1.5) -> None:
        line = QtWidgets.QGraphicsLineItem(x, y0, x, y1)
        pen = pg.mkPen(color, width=width)
        pen.setCosmetic(True)
        line.setPen(pen)
        self._add(line)

    def clear_items(self) -> None:
        for item in self.items:
            self.plot.removeItem(item)
        self.items.clear()

    def _draw_stave(self, stave: StaveView, base_y: float) -> None:
        width = stave_width(stave)
        for i in range(0, TOP_LINE + 1, 2):
            self._hline(0.0, width, base_y + i * STEP, self.theme.staff)

        self._text(
            CLEF_GLYPHS[stave.clef],
            CLEF_X,
            base_y + CLEF_LINE[stave.clef] * STEP,
            self.theme.ink,
            size=22,
        )

        glyph = SIGNATURE_GLYPHS[stave.key_signature.kind]
        for i, offset in enumerate(signature_offsets(stave.clef, stave.key_signature)):
            self._text(glyph, SIGNATURE_X + i * SIGNATURE_GAP, base_y + offset * STEP, self.theme.ink)

        x = MEASURE_START_X
        for measure in stave.measures:
            self._vline(x, base_y, base_y + TOP_LINE * STEP, self.theme.staff)
            x += MEASURE_PAD
            for note in measure:
                color = self.theme.color_for_state(note.state)
                offset = staff_offset(stave.clef, note.letter, note.octave)
                y = base_y + offset * STEP

                head = QtWidgets.QGraphicsEllipseItem(
                    x - NOTE_WIDTH / 2, y - NOTE_HEIGHT / 2, NOTE_WIDTH, NOTE_HEIGHT
                )
                head.setBrush(pg.mkBrush(color))
                head.setPen(pg.mkPen(None))
                head.setZValue(1)
                self._add(head)

                if note.display_accidental and note.accidental is not None:
                    self._text(ACCIDENTAL_GLYPHS[note.accidental], x - NOTE_WIDTH, y, color, anchor=(1.0, 0.5))

                for ledger in ledger_offsets(offset):
                    self._hline(x - LEDGER_HALF_WIDTH, x + LEDGER_HALF_WIDTH, base_y + ledger * STEP, color)
                x += NOTE_GAP
        self._vline(x, base_y, base_y + TOP_LINE * STEP, self.theme.staff)

    def draw_snapshot(self, snapshot: Snapshot) -> None:
        self.clear_items()
        # First stave on top.
        for i, stave in enumerate(snapshot.staves):
            self._draw_stave(stave, -i * STAVE_SPACING)

        top = TOP_LINE * STEP + STAVE_SPACING * 0.5
        bottom = -(len(snapshot.staves) - 1) * STAVE_SPACING - STAVE_SPACING * 0.5
        right = max((stave_width(s) for s in snapshot.staves), default=1.0) + 0.5
        self.plot.setXRange(-0.5, right, padding=0)
        self.plot.setYRange(bottom, top, padding=0)

        self.score_banner.setHtml(
            f"<span style='color:{self.theme.axis}; font-size:16pt; font-weight:bold;'>{snapshot.score}</span>"
        )
        self.score_banner.setPos(-0.5, top)

    def refresh(self) -> None:
        snapshot = self.game.snapshot()
        if snapshot == self.last_snapshot:
            return
        self.last_snapshot = snapshot
        self.draw_snapshot(snapshot)
