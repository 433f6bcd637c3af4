from __future__ import annotations

import logging
import threading
import time
from typing import Iterable, List, Optional

import mido

from game import Game, KeyEvent

logger = logging.getLogger(__name__)


def decode_message(msg: mido.Message) -> Optional[KeyEvent]:
    """Map a note message to a press/release event; anything else yields None."""
    if msg.type == "note_on" and msg.velocity > 0:
        return KeyEvent(msg.note, True)
    if msg.type in ("note_off",) or (msg.type == "note_on" and msg.velocity == 0):
        return KeyEvent(msg.note, False)
    return None


def decode_bytes(data: Iterable[int]) -> Optional[KeyEvent]:
    """Decode a raw 3-byte channel message; malformed input is dropped.

    Every live and replayed message goes through here, so anything that is
    not exactly three bytes never reaches the game.
    """
    data = list(data)
    if len(data) != 3:
        return None
    try:
        msg = mido.Message.from_bytes(data)
    except (ValueError, TypeError):
        logger.debug("Dropping malformed MIDI bytes %r", data)
        return None
    return decode_message(msg)


def dispatch(msg: mido.Message, game: Game) -> None:
    if msg.is_meta:
        return
    event = decode_bytes(msg.bytes())
    if event is None:
        return
    game.handle_event(event)


def pick_port(preferred: Optional[str] = None, ports: Optional[List[str]] = None) -> Optional[str]:
    """Return the first input port whose name contains `preferred`, else the first port."""
    if ports is None:
        ports = mido.get_input_names()
    if not ports:
        print("No MIDI input port available. Plug in a keyboard or pass a .mid file to replay.")
        return None
    for i, name in enumerate(ports):
        logger.info("Input port %d: %s", i, name)
    if preferred:
        matches = [name for name in ports if preferred.lower() in name.lower()]
        if matches:
            return matches[0]
        logger.warning("No input port matches %r; using %s", preferred, ports[0])
    return ports[0]


def listener_thread(port_name: str, game: Game, stop_flag: threading.Event) -> None:
    logger.info("Listening on %s", port_name)
    with mido.open_input(port_name) as port:
        for msg in port:
            if stop_flag.is_set():
                break
            dispatch(msg, game)


def file_player_thread(
    file_path: str,
    game: Game,
    stop_flag: threading.Event,
    speed: float = 1.0,
) -> None:
    mid = mido.MidiFile(file_path)
    logger.info("Playing %s (%.1fs)", file_path, mid.length)
    for msg in mid:
        if stop_flag.is_set():
            break
        if msg.time > 0:
            time.sleep(msg.time / speed)
        dispatch(msg, game)
