"""
Sight-reading trainer.

Shows staves of random single notes and judges what you play on a MIDI
keyboard against the note under the cursor. A correct key turns the note
green and moves on; a wrong key turns it red until the key is released.
When a stave is finished it scrolls away and a fresh one is appended.

Dependencies:
  pip install mido python-rtmidi pyqtgraph PySide6

Usage:
  python main.py [port substring | midi_file.mid] [--staves N] [--seed S] [--speed X] [--verbose]

- If a .mid file path is given, plays that file into the game.
- Otherwise opens the first MIDI input port containing the substring (or the first port).
- Every key on the keyboard is scored, A0 included.
- Pressing R in the window starts a new session with fresh staves.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading

from pyqtgraph.Qt import QtCore, QtGui, QtWidgets

from config import POLL_INTERVAL_MS, STAVE_COUNT
from game import Game
from generator import ContentGenerator
from streaming import file_player_thread, listener_thread, pick_port
from visual import Theme, Visual


def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def main() -> None:
    parser = argparse.ArgumentParser(description="PyQtGraph MIDI sight-reading trainer")
    parser.add_argument("target", nargs="?", help="Port substring or .mid file")
    parser.add_argument("--staves", type=int, default=STAVE_COUNT, help="Number of staves on screen")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the note generator")
    parser.add_argument("--speed", type=float, default=1.0, help="Playback speed factor for .mid files")
    parser.add_argument("--light", action="store_true", help="Use a light background")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every key event")
    args = parser.parse_args()

    if args.staves < 1:
        parser.error("--staves must be at least 1")
    if args.speed <= 0:
        parser.error("--speed must be positive")

    setup_logging(args.verbose)

    file_mode = bool(args.target and os.path.isfile(args.target) and args.target.lower().endswith(".mid"))
    port_name = None if file_mode else pick_port(args.target)
    if not port_name and not file_mode:
        return

    game = Game(ContentGenerator(seed=args.seed), stave_count=args.staves)
    stop_flag = threading.Event()

    app = QtWidgets.QApplication([])
    visual = Visual(game, Theme(dark=not args.light))
    visual.setWindowTitle("Sight-reading trainer")
    visual.resize(1200, 750)
    visual.show()

    def handle_key(event: QtGui.QKeyEvent) -> None:
        if event.key() == QtCore.Qt.Key_R:
            game.reset()
        elif event.key() == QtCore.Qt.Key_Escape:
            visual.close()
    visual.keyPressEvent = handle_key  # type: ignore[assignment]

    # Start MIDI source thread
    if file_mode and args.target:
        t = threading.Thread(
            target=file_player_thread,
            args=(args.target, game, stop_flag, args.speed),
            daemon=True,
        )
    else:
        t = threading.Thread(
            target=listener_thread,
            args=(port_name, game, stop_flag),
            daemon=True,
        )
    t.start()

    timer = QtCore.QTimer()
    timer.timeout.connect(visual.refresh)
    timer.start(POLL_INTERVAL_MS)

    try:
        app.exec()
    finally:
        stop_flag.set()
        t.join(timeout=1)


if __name__ == "__main__":
    main()
