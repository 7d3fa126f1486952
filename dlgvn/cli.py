from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional
import sys

from .config_io import SessionConfig, build_config
from .engine.renderer import DummyRenderer
from .engine.session import DialogueScreen


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="dlgvn", description="Visual novel style dialogue screen")
    sub = parser.add_subparsers(dest="cmd")

    p_run = sub.add_parser("run", help="Show the dialogue screen")
    p_run.add_argument("--name", type=str, default=None, help="Speaker name")
    p_run.add_argument("--bg", type=str, default=None, help="Background image path")
    p_run.add_argument("--pt", type=str, default=None, help="Portrait image path")
    p_run.add_argument("--dia", type=str, default=None, help="Dialogue lines as a JSON array of strings")
    p_run.add_argument("--config", type=str, default=None, help="JSON config file")
    p_run.add_argument("--font", type=str, default=None, help="Font/locale tag (en, ja, zh)")
    p_run.add_argument("--headless", action="store_true", help="Print lines instead of opening a window")
    p_run.add_argument("--lines", type=int, default=None, help="Lines to play in headless mode (default: whole script)")
    p_run.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    # Back-compat: no subcommand means 'run'
    argv_list = list(argv) if argv is not None else sys.argv[1:]
    if not argv_list or argv_list[0] != "run":
        args = p_run.parse_args(argv_list)
        args.cmd = "run"  # type: ignore[attr-defined]
    else:
        args = parser.parse_args(argv_list)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config_path: Optional[Path] = None
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Config not found: {config_path}")
            return 2

    cfg = build_config(config_path, {"name": args.name, "bg": args.bg, "pt": args.pt, "dia": args.dia})
    if args.font:
        cfg.font = args.font

    if args.headless:
        return run_headless(cfg, args.lines)

    from .engine.app_pygame import run_app  # local import to avoid test deps
    return run_app(cfg)


def run_headless(cfg: SessionConfig, lines: Optional[int] = None) -> int:
    """Play lines on a manual clock and print each one once fully shown."""
    from .ui.textwrap import wrap_text_generic

    def wrap(text, dialogue_type, font):
        # one character = one unit; no font needed without a window
        wrapped = wrap_text_generic(text, len, 48)
        return [line + "\n" for line in wrapped[:-1]] + wrapped[-1:]

    session = DialogueScreen.from_config(cfg, render=DummyRenderer(), wrap=wrap, clock=lambda: 0)
    now = 0.0
    count = len(cfg.script) if lines is None else max(0, lines)
    for _ in range(count):
        now = session.playback.play_line(start_ms=now)
        s = session.settings
        text = s.dialogue_text.replace("\n", " ")
        print(f"{s.speaker}: {text}" if s.speaker else text)  # noqa: T201
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
