"""Window, main loop and music."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import pygame

from .events import InputState
from .scripts import Scripts

_log = logging.getLogger(__name__)

TITLE = "Pineapple Project!"
_TRACKED_KEYS = {
    "w": pygame.K_w,
    "a": pygame.K_a,
    "s": pygame.K_s,
    "d": pygame.K_d,
    "k": pygame.K_k,
    "m": pygame.K_m,
    "r": pygame.K_r,
    "lshift": pygame.K_LSHIFT,
    "lctrl": pygame.K_LCTRL,
    "lalt": pygame.K_LALT,
}


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pineapple", description="Play the game.")
    parser.add_argument("--root", type=Path, default=Path("."), help="folder holding content/, levels/ and saves/")
    parser.add_argument("--width", type=int, default=600)
    parser.add_argument("--height", type=int, default=400)
    parser.add_argument("--fps", type=int, default=60)
    return parser.parse_args(argv)


def _snapshot() -> InputState:
    pressed = pygame.key.get_pressed()
    keys = frozenset(name for name, code in _TRACKED_KEYS.items() if pressed[code])
    x, y = pygame.mouse.get_pos()
    return InputState(keys, (float(x), float(y)), bool(pygame.mouse.get_pressed()[0]))


def _start_music(path: Path) -> bool:
    try:
        pygame.mixer.music.load(str(path))
        pygame.mixer.music.play(-1)
    except (pygame.error, OSError):
        _log.warning("Failed to load music")
        return False
    return True


def _run(args: argparse.Namespace) -> None:
    window_size = (args.width, args.height)
    window = pygame.display.set_mode(window_size)
    pygame.display.set_caption(TITLE)
    scripts = Scripts(root=args.root, window_size=window_size)
    clock = pygame.time.Clock()
    music = _start_music(Path(args.root) / "content" / "backgroundmusic.ogg")

    running = True
    while running and scripts.running:
        inputs = _snapshot()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                scripts.state.key_press(pygame.key.name(event.key))
            elif event.type == pygame.MOUSEBUTTONDOWN and not scripts.state.ui_elements:
                x, y = event.pos
                scripts.state.click(x, y, event.button, inputs)

        dt = clock.tick(args.fps) / 1000.0
        if music:
            pygame.mixer.music.set_volume(min(1.0, scripts.music_volume**2 * 8 / 100))

        scripts.update(inputs)
        scripts.state.update(dt, inputs)

        window.fill((0, 0, 0))
        scripts.state.draw(window)
        pygame.display.flip()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    pygame.init()
    try:
        _run(args)
    except Exception as error:  # the game reports any failure and exits cleanly
        print(f"Error! {error}", file=sys.stderr)
    finally:
        pygame.display.quit()
    return 0