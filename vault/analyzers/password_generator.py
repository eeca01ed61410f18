"""
Password Generator
===================

Draws random passwords from the selected character classes using the
operating system CSPRNG (:mod:`secrets`). When no class is selected the
pool falls back to lowercase letters and digits.

Every character is drawn independently, so a short password is not
guaranteed to contain every selected class; the attached strength
assessment reports any class that happens to be missing.
"""

from __future__ import annotations

import secrets
import string
from typing import Optional

from vault.analyzers.password_strength import PasswordStrengthEstimator
from vault.core.models import GeneratedPassword

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
NUMBERS = string.digits
SYMBOLS = "!@#$%^&*()_+~`|}{[]:;?><,./-="


class PasswordGenerator:
    """Random password generator bounded by a configured length range.

    Args:
        min_length: Shortest length accepted by :meth:`generate`.
        max_length: Longest length accepted by :meth:`generate`.
        estimator: Estimator used to assess generated passwords.
    """

    def __init__(
        self,
        min_length: int = 8,
        max_length: int = 32,
        estimator: Optional[PasswordStrengthEstimator] = None,
    ) -> None:
        if min_length < 1 or max_length < min_length:
            raise ValueError(
                f"Invalid length range: {min_length}-{max_length}"
            )
        self.min_length = min_length
        self.max_length = max_length
        self._estimator = estimator or PasswordStrengthEstimator()

    @staticmethod
    def build_pool(
        uppercase: bool = True,
        lowercase: bool = True,
        numbers: bool = True,
        symbols: bool = True,
    ) -> tuple[str, list[str]]:
        """Return the character pool and the names of the classes in it."""
        selected = [
            (uppercase, "uppercase", UPPERCASE),
            (lowercase, "lowercase", LOWERCASE),
            (numbers, "numbers", NUMBERS),
            (symbols, "symbols", SYMBOLS),
        ]
        pool = "".join(chars for enabled, _, chars in selected if enabled)
        names = [name for enabled, name, _ in selected if enabled]
        if not pool:
            return LOWERCASE + NUMBERS, ["lowercase", "numbers"]
        return pool, names

    def generate(
        self,
        length: int = 16,
        uppercase: bool = True,
        lowercase: bool = True,
        numbers: bool = True,
        symbols: bool = True,
    ) -> str:
        """Return a random password of exactly *length* characters.

        Raises:
            ValueError: *length* is outside ``[min_length, max_length]``.
        """
        if not self.min_length <= length <= self.max_length:
            raise ValueError(
                f"Password length must be between {self.min_length} "
                f"and {self.max_length}, got {length}"
            )
        pool, _ = self.build_pool(uppercase, lowercase, numbers, symbols)
        return "".join(secrets.choice(pool) for _ in range(length))

    def generate_assessed(
        self,
        length: int = 16,
        uppercase: bool = True,
        lowercase: bool = True,
        numbers: bool = True,
        symbols: bool = True,
    ) -> GeneratedPassword:
        """Generate a password and attach its strength assessment."""
        password = self.generate(length, uppercase, lowercase, numbers, symbols)
        _, classes = self.build_pool(uppercase, lowercase, numbers, symbols)
        return GeneratedPassword(
            password=password,
            length=length,
            character_classes=classes,
            assessment=self._estimator.assess(password),
        )
