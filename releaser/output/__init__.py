"""Output abstraction layer."""

from .console import ConsoleProtocol, MockConsole, OutputRecord, RichConsole, Style
from .report import print_run_report, run_exit_code

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
    "print_run_report",
    "run_exit_code",
]
