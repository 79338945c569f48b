#!/usr/bin/env python3
"""cellpad - a terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys: Move cursor (Shift selects, Ctrl moves by word)
    Ctrl-S: Save file
    Esc: Exit options (exit/save/cancel)
    F2 / F1: File tree / editor
    F4: Help
"""

from cellpad.__main__ import main


if __name__ == "__main__":
    main()
