"""cellpad CLI entry point.

Allows running via `python -m cellpad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from .settings import EditorSettings, load_settings
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def describe_key_event(ev) -> str:
    raw = _escape_bytes(ev.raw)
    parts = [f"type={ev.key_type.value}", f"value={ev.value!r}", f"raw='{raw}'"]
    flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl),
                                   ('shift', ev.is_shift), ('seq', ev.is_sequence)) if on]
    if flags:
        parts.append(f"flags={'+'.join(flags)}")
    return ' '.join(parts)


def run_keyboard_test() -> None:
    """Print the KeyEvent for every key pressed until ESC."""
    import termios
    from .keyboard import KeyboardHandler, KeyType
    from .terminal import TerminalInterface, control_keys_passthrough

    print("Keyboard test mode: press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        # ISIG off too, so Ctrl-C and Ctrl-Z show up as keys
        with control_keys_passthrough(termios.ISIG):
            while True:
                ev = kb.get_key_event(timeout=None)
                if not ev:
                    continue
                if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                    print("Exiting keyboard test.")
                    break
                print(describe_key_event(ev))
    finally:
        term.cleanup()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cellpad", description="Terminal text editor.")
    parser.add_argument("file", nargs="?", help="file to open (created on first save if missing)")
    parser.add_argument("-V", "--version", action="store_true", help="print version and exit")
    parser.add_argument("--keytest", action="store_true", help="show parsed key events until ESC")
    parser.add_argument("--log-file", help="write log messages to this file")
    parser.add_argument("--log-level", help="log level (DEBUG, INFO, WARNING, ERROR)")
    return parser


def configure_logging(settings: EditorSettings, log_file: Optional[str] = None,
                      log_level: Optional[str] = None) -> None:
    """Route the package logger to a file; without one logging stays silent."""
    path = log_file or settings.log_file
    if not path:
        return
    level_name = (log_level or settings.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("cellpad")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if args.version:
        print(get_version_string())
        return

    settings = load_settings()
    configure_logging(settings, args.log_file, args.log_level)

    if args.keytest:
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor(settings)
    if args.file:
        editor.load_file(args.file)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
