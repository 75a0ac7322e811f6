"""Point rotation and the arc drawn by a sword slash."""

from __future__ import annotations

import math

import pygame

ARC_COLOUR = (255, 255, 255)


def rotate_around_point(
    ox: float, oy: float, tx: float, ty: float, angle: float
) -> tuple[float, float]:
    """Rotate ``(tx, ty)`` about ``(ox, oy)`` by ``angle`` radians."""
    s = math.sin(angle)
    c = math.cos(angle)
    dx = tx - ox
    dy = ty - oy
    return dx * c - dy * s + ox, dx * s + dy * c + oy


class ArcSlash:
    """A polyline approximating an arc around a centre point."""

    def __init__(
        self,
        ox: float,
        oy: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        segments: int = 10,
    ) -> None:
        self.segments = segments
        increment = (end_angle - start_angle) / segments
        self.points = [
            rotate_around_point(ox, oy, ox + radius, oy, start_angle + increment * step)
            for step in range(segments)
        ]

    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        ox, oy = offset
        shifted = [(x - ox, y - oy) for x, y in self.points]
        if len(shifted) >= 2:
            pygame.draw.lines(surface, ARC_COLOUR, False, shifted)