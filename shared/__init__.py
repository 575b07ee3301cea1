"""
PassGuard Shared Module
=======================

Configuration, logging, console and result models shared by the
PassGuard engine, its CLI and its report writer.
"""

from shared.config import GuardConfig, PolicyConfig, get_config

__all__ = ["GuardConfig", "PolicyConfig", "get_config"]
