"""Test command-line parsing, logging setup and version reporting."""

import logging
from unittest.mock import patch

import pytest

from cellpad import __main__ as cli
from cellpad import version
from cellpad.keyboard import KeyEvent, KeyType
from cellpad.settings import EditorSettings


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.file is None
    assert args.version is False
    assert args.keytest is False
    assert args.log_file is None


def test_parser_options():
    args = cli.build_parser().parse_args(["notes.txt", "--log-file", "x.log", "--log-level", "debug"])
    assert args.file == "notes.txt"
    assert args.log_file == "x.log"
    assert args.log_level == "debug"


def test_version_flag_prints_and_exits(capsys):
    with patch('cellpad.__main__.get_version_string', return_value="cellpad 1.2.3"):
        cli.main(["--version"])
    assert capsys.readouterr().out.strip() == "cellpad 1.2.3"


def test_main_opens_named_file():
    with patch('cellpad.__main__.load_settings', return_value=EditorSettings()), \
            patch('cellpad.editor.Editor') as editor_cls:
        cli.main(["notes.txt"])
    editor = editor_cls.return_value
    editor.load_file.assert_called_once_with("notes.txt")
    editor.run.assert_called_once_with()


def test_main_without_file_starts_empty():
    with patch('cellpad.__main__.load_settings', return_value=EditorSettings()), \
            patch('cellpad.editor.Editor') as editor_cls:
        cli.main([])
    editor_cls.return_value.load_file.assert_not_called()


def test_describe_key_event():
    ev = KeyEvent(key_type=KeyType.CTRL, value='s', raw='\x13', is_ctrl=True)
    assert cli.describe_key_event(ev) == "type=ctrl value='s' raw='\\x13' flags=ctrl"


@pytest.fixture
def package_logger():
    logger = logging.getLogger("cellpad")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers[len(handlers):]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(level)


def test_configure_logging_writes_to_file(tmp_path, package_logger):
    log_file = tmp_path / "cellpad.log"
    cli.configure_logging(EditorSettings(), str(log_file), "info")

    logging.getLogger("cellpad.editor").info("hello log")
    for handler in package_logger.handlers:
        handler.flush()

    assert package_logger.level == logging.INFO
    assert "hello log" in log_file.read_text(encoding="utf-8")


def test_configure_logging_uses_settings_file(tmp_path, package_logger):
    log_file = tmp_path / "from-settings.log"
    cli.configure_logging(EditorSettings(log_file=str(log_file), log_level="ERROR"))
    assert package_logger.level == logging.ERROR


def test_configure_logging_without_file_adds_nothing(package_logger):
    before = list(package_logger.handlers)
    cli.configure_logging(EditorSettings())
    assert package_logger.handlers == before


def test_version_string_with_commit():
    with patch('cellpad.version._installed_version', return_value="0.1.0"), \
            patch('cellpad.version._commit_from_git', return_value=("abcdef1234567", True)):
        assert version.get_version_string() == "cellpad 0.1.0 (abcdef1-dirty)"


def test_version_string_falls_back_to_direct_url():
    with patch('cellpad.version._installed_version', return_value="0.1.0"), \
            patch('cellpad.version._commit_from_git', return_value=(None, False)), \
            patch('cellpad.version._commit_from_direct_url', return_value="1234567890"):
        assert version.get_version_string() == "cellpad 0.1.0 (1234567)"


def test_version_string_without_metadata():
    with patch('cellpad.version._installed_version', return_value=None), \
            patch('cellpad.version._commit_from_git', return_value=(None, False)), \
            patch('cellpad.version._commit_from_direct_url', return_value=None):
        assert version.get_version_string() == "cellpad unknown"
