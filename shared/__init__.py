"""
CyberVault Shared Module
========================

Common utilities, models, and configuration management shared by the
CyberVault toolkit packages.
"""

from shared.config import ToolkitConfig, get_config

__all__ = ["ToolkitConfig", "get_config"]
