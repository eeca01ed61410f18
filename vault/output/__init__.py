"""
Vault Output
=============

Console display and JSON report generation for CyberVault results.
"""

from vault.output.console import VaultConsoleOutput
from vault.output.report import VaultReportGenerator

__all__ = ["VaultConsoleOutput", "VaultReportGenerator"]
