"""
Vault Analyzers
================

Password-focused tools: the heuristic strength estimator and the
random password generator.
"""

from vault.analyzers.password_generator import PasswordGenerator
from vault.analyzers.password_strength import PasswordStrengthEstimator, assess_password

__all__ = [
    "PasswordGenerator",
    "PasswordStrengthEstimator",
    "assess_password",
]
