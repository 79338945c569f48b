"""System clipboard integration."""

import logging

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardManager:
    """Plain-text access to the system clipboard via pyperclip.

    The editor core never touches the clipboard; commands pass the selected
    text here and hand pasted text back to the buffer. A missing clipboard
    mechanism (no xclip/xsel/wl-clipboard, headless session) is logged and
    behaves like an empty clipboard.
    """

    @staticmethod
    def copy_text(text: str) -> bool:
        """Copy text to the system clipboard.

        Returns:
            True if the clipboard accepted the text
        """
        try:
            pyperclip.copy(text)
            return True
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard copy failed: {e}")
            return False

    @staticmethod
    def paste_text() -> str:
        """Return the clipboard's text, or an empty string if unavailable."""
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard paste failed: {e}")
            return ""
        return content or ""
