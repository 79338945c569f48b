"""Constants and configuration for the cellpad editor."""


class EditorConstants:
    """Central configuration constants for the editor."""

    # Accelerated (Alt+arrow) motion: step count doubles per repeat up to the ceiling
    ACCEL_BASELINE = 8
    ACCEL_CEILING = 1024

    # Horizontal scrolling assumes this many cells until the renderer reports a width
    DEFAULT_VIEW_WIDTH = 80

    # Screen layout
    HEADER_ROWS = 1
    STATUS_ROWS = 1
    SCROLLBAR_COLUMNS = 1
    MIN_LINE_NUMBER_DIGITS = 2
    FILE_TREE_PERCENT = 30
    HEADER_PATH_LIMIT = 30

    # File operations
    DEFAULT_SAVE_NAME = "output.txt"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    COPY_PIPE_MARKER = b'C'  # Byte written to pipe when SIGINT arrives (Ctrl-C copy)

    # Status / popup text
    STATUS_TEMPLATE = "[RWE] {mode} | lines: {lines}  Ln {row}, Col {col}  (Ctrl+S=Save, Esc=Popup, F4=Help, F2=FileTree, F1=Editor)"
    NEW_FILE_HEADER = "New File"
    POPUP_TITLES = {
        "exit_prompt": "Exit Options: (e)xit, (s)ave, (c)ancel",
        "new_file": "New File: Enter file name",
        "rename": "Rename/Move: Enter new name",
        "save_file": "Save As: Enter file name",
        "search": "Search: Enter text to find",
    }
