"""
CyberVault Vault -- Client-side Cryptography Toolkit
=====================================================

Crypto dispatcher (AES, DES, Triple DES, RC4, RC4-drop, Base64, MD5,
SHA-1, SHA-256, SHA-512, SHA-3), heuristic password strength estimator,
password generator and file hash comparison.

Modules:
    - vault.core.engine: Central orchestrator
    - vault.core.models: Pydantic data models and algorithm enums
    - vault.core.errors: Typed failures
    - vault.crypto: Dispatcher, passphrase envelope, digest table
    - vault.analyzers: Password strength estimator and generator
    - vault.output: Console and JSON report output
    - vault.cli: Click-based command-line interface
"""

__version__ = "1.0.0"
__tool_name__ = "vault"
