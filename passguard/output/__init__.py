"""
PassGuard Output Module
========================

Console display and report generation for PassGuard results.
"""

from passguard.output.console import PassGuardConsoleOutput
from passguard.output.report import PassGuardReportGenerator, build_check_result

__all__ = [
    "PassGuardConsoleOutput",
    "PassGuardReportGenerator",
    "build_check_result",
]
