from __future__ import annotations

from typing import Dict, Optional, Tuple

import pygame

from bubble2048.game import Direction


SWIPE_THRESHOLD = 30

KEY_TO_DIRECTION: Dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
}


def direction_from_key(key: int) -> Optional[Direction]:
    return KEY_TO_DIRECTION.get(key)


def direction_from_delta(dx: float, dy: float, threshold: float = SWIPE_THRESHOLD) -> Optional[Direction]:
    """Map a drag displacement (screen coordinates) to a direction.

    Drags shorter than `threshold` on both axes are not a move.
    """
    adx, ady = abs(dx), abs(dy)
    if max(adx, ady) < threshold:
        return None
    if adx > ady:
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class DragTracker:
    """Turns a press/release pair (mouse or finger) into at most one direction."""

    def __init__(self, threshold: float = SWIPE_THRESHOLD) -> None:
        self.threshold = threshold
        self._start: Optional[Tuple[float, float]] = None

    def press(self, x: float, y: float) -> None:
        self._start = (x, y)

    def release(self, x: float, y: float) -> Optional[Direction]:
        if self._start is None:
            return None
        sx, sy = self._start
        self._start = None
        return direction_from_delta(x - sx, y - sy, self.threshold)

    def cancel(self) -> None:
        self._start = None


def pointer_direction(event: pygame.event.Event, drag: DragTracker,
                      window_size: Tuple[int, int]) -> Optional[Direction]:
    """Feed a mouse, finger or focus event to `drag`; returns a direction on release.

    SDL mirrors every touch as a mouse event flagged `touch`; those are
    skipped so a swipe is decoded once, from the finger events.
    """
    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
        if getattr(event, "touch", False) or event.button != 1:
            return None
        if event.type == pygame.MOUSEBUTTONDOWN:
            drag.press(*event.pos)
            return None
        return drag.release(*event.pos)
    if event.type in (pygame.FINGERDOWN, pygame.FINGERUP):
        w, h = window_size
        if event.type == pygame.FINGERDOWN:
            drag.press(event.x * w, event.y * h)
            return None
        return drag.release(event.x * w, event.y * h)
    if event.type == pygame.WINDOWFOCUSLOST:
        drag.cancel()
    return None
