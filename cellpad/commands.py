"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .clipboard import ClipboardManager
from .keyboard import KeyType
from .modes import PopupMode, is_browsing

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    # Accelerated commands keep the Alt+arrow step counter growing
    accelerated = False

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Runs a NavigationEngine motion by name.

    With ``extend`` the selection grows from the pre-motion cursor (Shift);
    otherwise any selection is cleared.
    """

    def __init__(self, motion: str, extend: bool = False):
        self.motion = motion
        self.extend = extend

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        navigation = editor.navigation
        navigation.perform(getattr(navigation, self.motion), extend=self.extend)
        return False


class AcceleratedMovementCommand(MovementCommand):
    accelerated = True


class ScrollViewCommand(EditorCommand):
    """Scroll the view one row without moving the cursor."""

    def __init__(self, direction: int):
        self.direction = direction

    def execute(self, editor, key_event):
        if self.direction < 0:
            editor.navigation.scroll_up()
        else:
            editor.navigation.scroll_down()
        return False


class EditCommand(EditorCommand):
    """Base class for editing commands.

    The buffer records its own undo snapshots; a command reports a change
    when the buffer's revision moved.
    """

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        before = editor.buffer.revision
        self._edit(editor, key_event)
        editor.navigation.adjust()
        return editor.buffer.revision != before

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if char and (ord(char[0]) >= 32 or char == '\t'):
            editor.buffer.insert_character(char)


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.insert_line_break()


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.delete_backward()


class CutCommand(EditCommand):
    def _edit(self, editor, key_event):
        text = editor.buffer.cut_selection()
        if text is None:
            editor.status_message = "No selection"
        elif ClipboardManager.copy_text(text):
            editor.status_message = "Selection cut"
        else:
            editor.status_message = "Selection cut (clipboard unavailable)"


class PasteCommand(EditCommand):
    def _edit(self, editor, key_event):
        text = ClipboardManager.paste_text()
        if text:
            editor.buffer.paste_text(text)
        else:
            editor.status_message = "Clipboard is empty"


class UndoCommand(EditCommand):
    def _edit(self, editor, key_event):
        if editor.buffer.undo():
            editor.status_message = "Undone"
        else:
            editor.status_message = "Nothing to undo"


class RedoCommand(EditCommand):
    def _edit(self, editor, key_event):
        if editor.buffer.redo():
            editor.status_message = "Redone"
        else:
            editor.status_message = "Nothing to redo"


class SystemCommand(EditorCommand):
    """Base class for system commands like save, copy, mode switches."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class CopyCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        text = editor.buffer.selected_text()
        if text is None:
            editor.status_message = "No selection"
        elif ClipboardManager.copy_text(text):
            editor.status_message = "Selection copied"
        else:
            editor.status_message = "Clipboard unavailable"


class SelectAllCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.buffer.select_all()
        editor.navigation.adjust()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class PopupCommand(SystemCommand):
    def __init__(self, popup: PopupMode):
        self.popup = popup

    def _execute_system(self, editor, key_event):
        editor.open_popup(self.popup)


class HelpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.show_help()


class BrowseCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_browsing()


class EditModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_editing()


class BrowserCommand(SystemCommand):
    """Base class for file-tree commands; they act on the active browser."""

    def _execute_system(self, editor, key_event):
        self._browse(editor, editor.mode.browser, key_event)

    @abstractmethod
    def _browse(self, editor: 'Editor', browser, key_event: 'KeyEvent'):
        pass


class BrowserUpCommand(BrowserCommand):
    def _browse(self, editor, browser, key_event):
        browser.move_up()


class BrowserDownCommand(BrowserCommand):
    def _browse(self, editor, browser, key_event):
        browser.move_down()


class BrowserEnterCommand(BrowserCommand):
    def _browse(self, editor, browser, key_event):
        path = browser.enter()
        if path is not None:
            editor.open_file(path)


class BrowserGoUpCommand(BrowserCommand):
    def _browse(self, editor, browser, key_event):
        browser.go_up()


class BrowserNumberCommand(BrowserCommand):
    """Digits 1-9 open the n-th entry of the visible window."""

    def _browse(self, editor, browser, key_event):
        if browser.select_number(int(key_event.value)):
            path = browser.enter()
            if path is not None:
                editor.open_file(path)


class BrowserDeleteCommand(BrowserCommand):
    def _browse(self, editor, browser, key_event):
        entry = browser.selected_entry
        if entry is None:
            return
        if browser.delete_selected():
            editor.status_message = f"Deleted {entry.name}"
        else:
            editor.status_message = f"Error: Cannot delete {entry.name}"


class CommandRegistry:
    """Registry for mapping key combinations to commands, per mode."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._browse_commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()
        self._setup_browse_commands()

    def _setup_default_commands(self):
        """Set up the editing-mode command mappings."""
        # Movement commands
        for direction in ('left', 'right', 'up', 'down'):
            self.register((KeyType.SPECIAL, direction), MovementCommand(f'move_{direction}'))
            # Selection movement commands (Shift+arrow)
            self.register((KeyType.SHIFT_SPECIAL, direction), MovementCommand(f'move_{direction}', extend=True))

        # Ctrl+arrow for word movement, Alt+arrow for accelerated movement
        self.register((KeyType.CTRL_SPECIAL, 'left'), MovementCommand('word_left'))
        self.register((KeyType.CTRL_SPECIAL, 'right'), MovementCommand('word_right'))
        self.register((KeyType.ALT, 'left'), AcceleratedMovementCommand('accelerated_left'))
        self.register((KeyType.ALT, 'right'), AcceleratedMovementCommand('accelerated_right'))

        # View scrolling
        self.register((KeyType.CTRL_SPECIAL, 'up'), ScrollViewCommand(-1))
        self.register((KeyType.CTRL_SPECIAL, 'down'), ScrollViewCommand(1))

        # Line, page and document movement
        self.register((KeyType.SPECIAL, 'home'), MovementCommand('line_start'))
        self.register((KeyType.SPECIAL, 'end'), MovementCommand('line_end'))
        self.register((KeyType.SHIFT_SPECIAL, 'home'), MovementCommand('line_start', extend=True))
        self.register((KeyType.SHIFT_SPECIAL, 'end'), MovementCommand('line_end', extend=True))
        self.register((KeyType.CTRL_SPECIAL, 'home'), MovementCommand('document_start'))
        self.register((KeyType.CTRL_SPECIAL, 'end'), MovementCommand('document_end'))
        self.register((KeyType.SPECIAL, 'page_up'), MovementCommand('page_up'))
        self.register((KeyType.SPECIAL, 'page_down'), MovementCommand('page_down'))

        # Editing commands
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), BackspaceCommand())
        self.register((KeyType.CTRL, 'x'), CutCommand())
        self.register((KeyType.CTRL, 'c'), CopyCommand())
        self.register((KeyType.CTRL, 'v'), PasteCommand())
        self.register((KeyType.CTRL, 'a'), SelectAllCommand())
        # Undo/redo
        self.register((KeyType.CTRL, 'z'), UndoCommand())
        self.register((KeyType.CTRL, 'r'), RedoCommand())

        # Popups
        self.register((KeyType.CTRL, 'f'), PopupCommand(PopupMode.SEARCH))
        self.register((KeyType.CTRL, 'n'), PopupCommand(PopupMode.NEW_FILE))
        self.register((KeyType.CTRL, 'o'), PopupCommand(PopupMode.RENAME))

        self._register_global(self._commands)

    def _setup_browse_commands(self):
        """Set up the file-tree command mappings."""
        table = self._browse_commands
        table[(KeyType.SPECIAL, 'up')] = BrowserUpCommand()
        table[(KeyType.SPECIAL, 'down')] = BrowserDownCommand()
        table[(KeyType.SPECIAL, 'right')] = BrowserEnterCommand()
        table[(KeyType.SPECIAL, 'enter')] = BrowserEnterCommand()
        table[(KeyType.SPECIAL, 'left')] = BrowserGoUpCommand()
        table[(KeyType.SPECIAL, 'delete')] = BrowserDeleteCommand()
        for digit in '123456789':
            table[(KeyType.REGULAR, digit)] = BrowserNumberCommand()
        self._register_global(table)

    def _register_global(self, table: Dict[Tuple[KeyType, str], EditorCommand]):
        """Keys that work the same in both modes."""
        table[(KeyType.CTRL, 's')] = SaveCommand()
        table[(KeyType.SPECIAL, 'escape')] = PopupCommand(PopupMode.EXIT_PROMPT)
        table[(KeyType.SPECIAL, 'f1')] = EditModeCommand()
        table[(KeyType.SPECIAL, 'f2')] = BrowseCommand()
        table[(KeyType.SPECIAL, 'f4')] = HelpCommand()

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register an editing-mode command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str, browsing: bool = False) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        table = self._browse_commands if browsing else self._commands
        return table.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Any key that does not run an accelerated command resets the
        Alt+arrow step counter.

        Returns:
            True if the document was modified
        """
        browsing = is_browsing(editor.mode)
        command = self.get_command(key_event.key_type, key_event.value, browsing)

        # Handle regular text input
        if command is None and not browsing and key_event.key_type == KeyType.REGULAR:
            command = self._insert_text

        if command is None or not command.accelerated:
            editor.navigation.reset_acceleration()
        if command is None:
            return False
        return command.execute(editor, key_event)
