"""Main editor controller: run loop, popups, file I/O and screen layout."""

import errno
import logging
import os
import select
import signal
import tempfile
from pathlib import Path
from typing import Optional, Union

from .commands import CommandRegistry
from .constants import EditorConstants
from .filetree import FileTreeBrowser
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .model import DocumentBuffer
from .modes import EditingState, EditorMode, PopupMode, enter_browsing, enter_editing, is_browsing
from .navigation import NavigationEngine
from .settings import EditorSettings
from .terminal import TerminalInterface, control_keys_passthrough, header_text, line_number_width, status_text

logger = logging.getLogger(__name__)

HELP_LINES = [
    "cellpad - Help (press any key to return)",
    "",
    "-- Global --",
    "F4 ...................... Toggle help",
    "Esc ..................... Exit options (exit/save/cancel)",
    "Ctrl+S .................. Save file",
    "F1 / F2 ................. Editor / FileTree mode",
    "",
    "-- Editor Mode --",
    "Arrow keys .............. Move cursor",
    "Shift+Arrow ............. Select region",
    "Ctrl+Left/Right ......... Move by word",
    "Alt+Left/Right .......... Jump with acceleration",
    "Ctrl+Up/Down ............ Scroll view",
    "Home/End ................ Line start/end",
    "Ctrl+Home/End ........... Document start/end",
    "PageUp/PageDown ......... Move by a screen",
    "Ctrl+C / X / V .......... Copy / Cut / Paste",
    "Ctrl+A .................. Select all",
    "Ctrl+Z / Ctrl+R ......... Undo / Redo",
    "Ctrl+F .................. Search text",
    "Ctrl+N .................. New file",
    "Ctrl+O .................. Rename/Move file",
    "",
    "-- FileTree Mode --",
    "Up/Down ................. Navigate entries",
    "Right/Enter ............. Enter directory or open file",
    "Left .................... Go up a directory",
    "1-9 ..................... Open the n-th visible entry",
    "Del ..................... Delete entry",
]


class Editor:
    """Text editor application controller.

    Owns one document buffer, its navigation engine, the current mode and
    popup state. Everything the run loop does goes through
    ``handle_key_event`` so tests can drive the editor without a terminal.
    """

    def __init__(self, settings: Optional[EditorSettings] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.navigation = NavigationEngine(accel_baseline=self.settings.accel_baseline,
                                           accel_ceiling=self.settings.accel_ceiling)
        self.buffer = DocumentBuffer(self.navigation)
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.mode: EditorMode = EditingState()
        self.file_tree: Optional[FileTreeBrowser] = None
        self.running = False
        # File handling
        self.filename: Optional[Path] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.popup: Optional[PopupMode] = None
        self.popup_input = ""
        self.help_visible = False
        self._full_redraw = True
        self._signal_pipe_w: Optional[int] = None

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._signal_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) - treat as copy command."""
        del signum, frame  # Unused
        os.write(self._signal_pipe_w, EditorConstants.COPY_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        pipe_r, self._signal_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)

        try:
            # Flags are changed after cbreak so cbreak does not reset them
            with self.terminal.term.cbreak(), control_keys_passthrough():
                need_draw = True
                while self.running:
                    if need_draw:
                        self._draw()
                        need_draw = False

                    # Wait for input on stdin or the signal pipe
                    ready, _, _ = select.select([0, pipe_r], [], [])

                    if pipe_r in ready:
                        data = os.read(pipe_r, 1024)
                        if EditorConstants.COPY_PIPE_MARKER in data:
                            # Synthetic Ctrl-C event for copy
                            self.handle_key_event(KeyEvent(key_type=KeyType.CTRL, value='c',
                                                           raw='\x03', is_ctrl=True))
                        if EditorConstants.RESIZE_PIPE_MARKER in data:
                            self._full_redraw = True
                        need_draw = True
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self.handle_key_event(key_event)
                            need_draw = True
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(pipe_r)
            os.close(self._signal_pipe_w)
            self._signal_pipe_w = None
            self.terminal.cleanup()

    # --- Key handling ---
    def handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # If help is visible, any key dismisses it
        if self.help_visible:
            self.hide_help()
            return

        if self.popup is not None:
            self._handle_popup_key(key_event)
            return

        # Clear status message on any keypress outside popups
        self.status_message = None

        was_modified = self.command_registry.execute(self, key_event)
        if was_modified:
            self.modified = True

    def open_popup(self, popup: PopupMode):
        self.popup = popup
        self.popup_input = self.settings.default_save_name if popup is PopupMode.SAVE_FILE else ""

    def close_popup(self):
        self.popup = None
        self.popup_input = ""

    def _handle_popup_key(self, key_event: KeyEvent):
        """Enter confirms, Esc cancels, Backspace edits, printable keys append."""
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            self.close_popup()
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            popup, text = self.popup, self.popup_input.strip()
            self.close_popup()
            self._confirm_popup(popup, text)
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.popup_input = self.popup_input[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if char and ord(char[0]) >= 32:
                self.popup_input += char

    def _confirm_popup(self, popup: PopupMode, text: str):
        if popup is PopupMode.EXIT_PROMPT:
            choice = text.lower()
            if choice in ('e', 'exit'):
                self.running = False
            elif choice in ('s', 'save'):
                self.handle_save()
        elif popup is PopupMode.SAVE_FILE:
            if text and self.save_file(text):
                self.status_message = f"Saved to {self.filename}"
        elif popup is PopupMode.NEW_FILE:
            if text:
                self.new_file(text)
        elif popup is PopupMode.RENAME:
            if text:
                self.rename_file(text)
        elif popup is PopupMode.SEARCH:
            if text:
                if self.buffer.search(text):
                    self.navigation.adjust()
                else:
                    self.status_message = f"Not found: {text}"

    # --- Help and modes ---
    def show_help(self):
        """Show the help screen."""
        self.help_visible = True

    def hide_help(self):
        """Hide the help screen and return to the previous mode."""
        self.help_visible = False
        self._full_redraw = True

    def enter_browsing(self):
        if self.file_tree is None:
            self.file_tree = FileTreeBrowser(show_hidden=self.settings.show_hidden)
        self.mode = enter_browsing(self.mode, self.file_tree)

    def enter_editing(self):
        self.mode = enter_editing(self.mode)

    def open_file(self, path: Union[str, Path]):
        """Load ``path`` and switch to editing if it could be read."""
        if self.load_file(path):
            self.enter_editing()

    # --- File operations ---
    def load_file(self, filename: Union[str, Path]) -> bool:
        """Load a file into the editor.

        A missing file starts an empty document under that name.

        Returns:
            True if the editor now holds the named document
        """
        path = Path(filename)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            content = ""
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load {path}: {e}")
            self.status_message = f"Error: Cannot open {path}"
            return False
        self.buffer.load(content)
        self.navigation.reset_acceleration()
        self.filename = path
        self.modified = False
        logger.info(f"Loaded {path}")
        return True

    def save_file(self, filename: Union[str, Path]) -> bool:
        """Save the current document to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        path = Path(filename)
        temp_filename = None
        try:
            # Temp file in the target directory so the rename stays on one filesystem
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=path.parent,
                                             suffix=path.suffix, delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(self.buffer.serialize())
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
        except OSError as e:
            logger.warning(f"Could not save {path}: {e}")
            if isinstance(e, PermissionError):
                self.status_message = f"Error: Permission denied saving {path}"
            elif e.errno == errno.ENOSPC:
                self.status_message = "Error: No space left on device"
            else:
                self.status_message = f"Error: Cannot save to {path}"
            self._remove_temp_file(temp_filename)
            return False

        self.filename = path
        self.modified = False
        logger.info(f"Saved {path}")
        return True

    @staticmethod
    def _remove_temp_file(temp_filename: Optional[str]):
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {temp_filename}: {e}")

    def handle_save(self):
        """Save to the current file, or ask for a name if there is none."""
        if self.filename:
            if self.save_file(self.filename):
                self.status_message = f"Saved to {self.filename}"
        else:
            self.open_popup(PopupMode.SAVE_FILE)

    def new_file(self, filename: Union[str, Path]) -> bool:
        """Create an empty file (and its parent directories) and edit it."""
        path = Path(filename)
        try:
            if path.parent != Path('.'):
                path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding='utf-8')
        except OSError as e:
            logger.warning(f"Could not create {path}: {e}")
            self.status_message = f"Error: Cannot create {path}"
            return False
        self.buffer.load("")
        self.filename = path
        self.modified = False
        self._refresh_file_tree(path)
        self.status_message = f"Created {path}"
        return True

    def rename_file(self, new_name: Union[str, Path]) -> bool:
        """Move the current file to ``new_name`` and follow it in the file tree."""
        if self.filename is None:
            self.status_message = "No file to rename"
            return False
        new_path = Path(new_name)
        try:
            os.rename(self.filename, new_path)
        except OSError as e:
            logger.warning(f"Could not rename {self.filename} to {new_path}: {e}")
            self.status_message = f"Error: Cannot rename to {new_path}"
            return False
        logger.info(f"Renamed {self.filename} to {new_path}")
        self.filename = new_path
        self._refresh_file_tree(new_path)
        self.status_message = f"Renamed to {new_path}"
        return True

    def _refresh_file_tree(self, path: Path):
        if self.file_tree is None:
            return
        self.file_tree.refresh(path.resolve().parent)
        self.file_tree.select_path(path.resolve())

    # --- Drawing ---
    def _layout(self) -> tuple[int, int, int]:
        """Editor-area width, body height and file-tree width for the current size."""
        width, height = self.terminal.width, self.terminal.height
        body_height = max(1, height - EditorConstants.HEADER_ROWS - EditorConstants.STATUS_ROWS)
        tree_width = (width * EditorConstants.FILE_TREE_PERCENT) // 100 if is_browsing(self.mode) else 0
        return width - tree_width, body_height, tree_width

    def _draw(self):
        if self.help_visible:
            self.terminal.draw_help(HELP_LINES)
            return
        if self._full_redraw:
            self.terminal.clear_screen()
            self._full_redraw = False

        editor_width, body_height, tree_width = self._layout()
        top = EditorConstants.HEADER_ROWS
        gutter = line_number_width(self.buffer.line_count) + 1
        self.navigation.set_viewport(editor_width - gutter - EditorConstants.SCROLLBAR_COLUMNS, body_height)
        browsing = is_browsing(self.mode)
        if not browsing:
            self.navigation.adjust()

        self.terminal.draw_bar(0, 0, editor_width, header_text(self.filename), reverse=True)
        cursor_at = self.terminal.draw_text_area(self.buffer, self.navigation, top, 0, editor_width,
                                                 body_height, follow_cursor=not browsing)
        if browsing:
            self.terminal.draw_file_tree(self.mode.browser, 0, editor_width, tree_width,
                                         body_height + EditorConstants.HEADER_ROWS)

        status = status_text(self.mode.name, self.buffer.line_count,
                             self.buffer.cursor.row, self.buffer.cursor.column)
        if self.status_message:
            status = f"{status} | {self.status_message}"
        self.terminal.draw_bar(top + body_height, 0, self.terminal.width, status, reverse=True)

        if self.popup is not None:
            self.terminal.draw_popup(EditorConstants.POPUP_TITLES[self.popup.value], self.popup_input)
        elif cursor_at is not None:
            self.terminal.place_cursor(*cursor_at)
        else:
            self.terminal.hide_cursor()
