"""
guidepack CLI package.

Commands are auto-discovered: root commands live in ``cli/commands/`` and
domain commands in ``cli/<domain>/`` (docs/, profiles/, config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, format_json
from ._args import (
    add_json_flag,
    add_repo_root_flag,
    add_verbose_flag,
    add_standard_flags,
)
from ._utils import (
    exit_code_for,
    get_config_manager,
    get_repo_root,
    load_project_catalog,
    report_error,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    "format_json",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_verbose_flag",
    "add_standard_flags",
    # Utilities
    "exit_code_for",
    "get_config_manager",
    "get_repo_root",
    "load_project_catalog",
    "report_error",
]
