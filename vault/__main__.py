"""
Vault Module Entry Point
=========================

Allows running the CyberVault CLI via: python -m vault
"""

from vault.cli import main

if __name__ == "__main__":
    main()
