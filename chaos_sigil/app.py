"""Frame-driven application controller.

:class:`SigilApp` is the glue between a windowing backend and the core: the
backend forwards key presses and calls :meth:`SigilApp.tick` once per frame,
then draws the returned :class:`AppFrame`. All time-dependent effects
(cursor blink, pulse, line-by-line animation, the "saved" notice) read the
injected clock; the sigil itself never does.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol, Tuple, Union

from .config import SigilConfig, get_default_config
from .pipeline import generate_sigil, render_result
from .render import DrawList
from .state import SigilStore
from .svg import save_sigil_svg
from .variation import fresh_seed

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

ANIMATION_SPEED = 3.0  # segments per second
BLINK_PERIOD = 0.5
PULSE_PERIOD = 4.0
SAVE_NOTICE_SECONDS = 1.5

# Bare modifier presses the windowing backend reports on their own.
MODIFIER_KEYS = frozenset({"shift", "control", "ctrl", "alt", "super", "cmd"})


@dataclass(frozen=True)
class AppFrame:
    state: str
    draw: DrawList
    text: str = ""
    cursor: Optional[int] = None
    selection: Optional[Tuple[int, int]] = None
    notice: Optional[str] = None
    title: str = "Chaos Sigil Generator"


class Canvas(Protocol):
    def draw_frame(self, frame: AppFrame) -> None:
        ...


class SigilApp:
    def __init__(
        self,
        config: Optional[SigilConfig] = None,
        *,
        clock: Clock = time.monotonic,
        save_dir: Union[str, Path] = "sigils",
    ) -> None:
        self.config = config or get_default_config()
        self.clock = clock
        self.save_dir = Path(save_dir)
        self.store = SigilStore()
        self.state = "start"
        self.intention = ""
        self.cursor_pos = 0
        self.selection_start: Optional[int] = None
        self.progress = 0.0
        self.notice: Optional[str] = None
        self.last_saved: Optional[Path] = None
        self._started = clock()
        self._last_tick = self._started
        self._blink_timer = 0.0
        self._save_timer = 0.0

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    @property
    def selection(self) -> Optional[Tuple[int, int]]:
        """Selected ``(start, end)`` range of the intention, ``None`` when nothing is selected."""

        if self.selection_start is None or self.selection_start == self.cursor_pos:
            return None
        return (min(self.selection_start, self.cursor_pos), max(self.selection_start, self.cursor_pos))

    def _delete_selection(self) -> bool:
        selected = self.selection
        self.selection_start = None
        if selected is None:
            return False
        lo, hi = selected
        self.intention = self.intention[:lo] + self.intention[hi:]
        self.cursor_pos = lo
        return True

    def _extend_selection(self, cursor_pos: int) -> None:
        if self.selection_start is None:
            self.selection_start = self.cursor_pos
        self.cursor_pos = cursor_pos

    def handle_text(self, chars: str) -> None:
        """Insert typed characters at the cursor, replacing any selection (input state only)."""

        if self.state != "input" or not chars:
            return
        chars = "".join(ch for ch in chars if ch.isprintable())
        if not chars:
            return
        self._delete_selection()
        self.intention = self.intention[: self.cursor_pos] + chars + self.intention[self.cursor_pos :]
        self.cursor_pos += len(chars)
        self._blink_timer = 0.0

    def handle_key(self, key: str) -> None:
        """Dispatch one key press; single printable characters type in the input state."""

        if self.state == "start":
            self.state = "input"
            return
        if self.state == "input" and len(key) == 1:
            self.handle_text(key)
            return
        key = key.lower()
        if self.state == "input":
            self._handle_input_key(key)
        elif self.state in ("display", "animating"):
            self._handle_display_key(key)

    def _handle_input_key(self, key: str) -> None:
        if key in MODIFIER_KEYS:
            return
        if key.startswith("shift+") and key[6:] in ("left", "right", "home", "end"):
            self._handle_selection_key(key[6:])
            self._blink_timer = 0.0
            return
        if key in ("backspace", "delete") and self._delete_selection():
            self._blink_timer = 0.0
            return
        if key != "ctrl+a":
            self.selection_start = None
        if key == "enter":
            self.submit()
        elif key == "ctrl+a":
            self.selection_start = 0
            self.cursor_pos = len(self.intention)
        elif key == "backspace" and self.cursor_pos > 0:
            self.intention = self.intention[: self.cursor_pos - 1] + self.intention[self.cursor_pos :]
            self.cursor_pos -= 1
        elif key == "delete" and self.cursor_pos < len(self.intention):
            self.intention = self.intention[: self.cursor_pos] + self.intention[self.cursor_pos + 1 :]
        elif key == "left":
            self.cursor_pos = max(0, self.cursor_pos - 1)
        elif key == "right":
            self.cursor_pos = min(len(self.intention), self.cursor_pos + 1)
        elif key == "home":
            self.cursor_pos = 0
        elif key == "end":
            self.cursor_pos = len(self.intention)
        elif key == "escape":
            self.intention = ""
            self.cursor_pos = 0
        self._blink_timer = 0.0

    def _handle_selection_key(self, key: str) -> None:
        if key == "left":
            self._extend_selection(max(0, self.cursor_pos - 1))
        elif key == "right":
            self._extend_selection(min(len(self.intention), self.cursor_pos + 1))
        elif key == "home":
            self._extend_selection(0)
        elif key == "end":
            self._extend_selection(len(self.intention))

    def _handle_display_key(self, key: str) -> None:
        if key in ("enter", "escape"):
            self.state = "input"
            self.notice = None
        elif key in ("a", " ", "space"):
            self.animate()
        elif key == "r":
            self.randomize()
        elif key == "s":
            self.save()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def submit(self) -> None:
        """Build the sigil for the current text and publish it."""

        result = generate_sigil(self.intention, self.config)
        self.store.publish(result)
        self.notice = None if not result.sigil.is_empty else "nothing left to draw"
        self.state = "display"

    def randomize(self) -> None:
        """Rebuild the current intent with a freshly drawn variation seed."""

        snapshot = self.store.current()
        if snapshot is None:
            return
        seed = fresh_seed(self.clock)
        self.store.publish(generate_sigil(snapshot.intent.raw, self.config, seed=seed))

    def animate(self) -> None:
        snapshot = self.store.current()
        if snapshot is None or not snapshot.sigil.segments:
            return
        self.progress = 0.0
        self.state = "animating"

    def save(self) -> Optional[Path]:
        snapshot = self.store.current()
        if snapshot is None:
            return None
        frame = render_result(snapshot.result, self.config)
        self.last_saved = save_sigil_svg(frame, snapshot.intent.raw, self.save_dir)
        self.notice = "Sigil Saved!"
        self._save_timer = SAVE_NOTICE_SECONDS
        self.state = "saving"
        return self.last_saved

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def update(self) -> float:
        now = self.clock()
        dt = max(0.0, now - self._last_tick)
        self._last_tick = now
        self._blink_timer = (self._blink_timer + dt) % (2 * BLINK_PERIOD)

        if self.state == "animating":
            snapshot = self.store.current()
            total = len(snapshot.sigil.segments) if snapshot is not None else 0
            self.progress += dt * ANIMATION_SPEED
            if self.progress >= total:
                self.progress = float(total)
                self.state = "display"
        elif self.state == "saving":
            self._save_timer -= dt
            if self._save_timer <= 0:
                self._save_timer = 0.0
                self.notice = None
                self.state = "display"
        return dt

    def frame(self) -> AppFrame:
        """Snapshot of what to draw right now."""

        cfg = self.config.render
        empty = DrawList(width=cfg.canvas_size[0], height=cfg.canvas_size[1], palette=dict(cfg.palette))
        if self.state == "start":
            return AppFrame(state=self.state, draw=empty, notice="press any key to begin")
        if self.state == "input":
            cursor = self.cursor_pos if self._blink_timer < BLINK_PERIOD else None
            return AppFrame(
                state=self.state,
                draw=empty,
                text=self.intention,
                cursor=cursor,
                selection=self.selection,
                notice=self.notice,
            )

        snapshot = self.store.current()
        if snapshot is None:
            return AppFrame(state=self.state, draw=empty, notice=self.notice)
        elapsed = self._last_tick - self._started
        pulse = 0.5 + 0.5 * math.sin(2.0 * math.pi * elapsed / PULSE_PERIOD)
        progress = self.progress if self.state == "animating" else None
        draw = render_result(snapshot.result, self.config, progress=progress, pulse=pulse)
        return AppFrame(
            state=self.state,
            draw=draw,
            text=snapshot.intent.raw,
            notice=self.notice,
        )

    def tick(self) -> AppFrame:
        self.update()
        return self.frame()

    def run_frame(self, canvas: Canvas) -> AppFrame:
        frame = self.tick()
        canvas.draw_frame(frame)
        return frame


__all__ = [
    "ANIMATION_SPEED",
    "AppFrame",
    "BLINK_PERIOD",
    "Canvas",
    "Clock",
    "PULSE_PERIOD",
    "SAVE_NOTICE_SECONDS",
    "SigilApp",
]
