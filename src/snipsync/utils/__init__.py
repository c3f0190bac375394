"""Utility modules for snipsync."""

from .console import (
    _rich_success,
    _rich_error,
    _rich_warning,
    _rich_info,
    _rich_echo,
    _rich_panel,
    _create_files_table,
    _create_progress,
    _get_console,
    STATUS_SYMBOLS
)
from .helpers import join_lines, read_text_lines, split_lines, to_posix

__all__ = [
    '_rich_success',
    '_rich_error',
    '_rich_warning',
    '_rich_info',
    '_rich_echo',
    '_rich_panel',
    '_create_files_table',
    '_create_progress',
    '_get_console',
    'STATUS_SYMBOLS',
    'join_lines',
    'read_text_lines',
    'split_lines',
    'to_posix',
]
