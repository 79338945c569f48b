"""Editor modes as a tagged union with explicit transitions."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .filetree import FileTreeBrowser


@dataclass(frozen=True)
class EditingState:
    name: str = "Editor"


@dataclass(frozen=True)
class BrowsingState:
    browser: FileTreeBrowser
    name: str = "FileTree"


EditorMode = Union[EditingState, BrowsingState]


def enter_browsing(mode: EditorMode, browser: FileTreeBrowser) -> BrowsingState:
    """Switch to browsing with ``browser``; a no-op if already browsing it."""
    if isinstance(mode, BrowsingState) and mode.browser is browser:
        return mode
    return BrowsingState(browser)


def enter_editing(mode: EditorMode) -> EditingState:
    if isinstance(mode, EditingState):
        return mode
    return EditingState()


def is_browsing(mode: EditorMode) -> bool:
    return isinstance(mode, BrowsingState)


class PopupMode(Enum):
    """One-line prompts drawn over either mode; values key POPUP_TITLES."""
    EXIT_PROMPT = "exit_prompt"
    NEW_FILE = "new_file"
    RENAME = "rename"
    SAVE_FILE = "save_file"
    SEARCH = "search"
