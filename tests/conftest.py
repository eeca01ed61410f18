"""Shared pytest fixtures for the CyberVault test suite."""

from __future__ import annotations

import pytest

from shared.config import ToolkitConfig
from vault.analyzers.password_strength import PasswordStrengthEstimator
from vault.core.engine import VaultEngine
from vault.crypto.dispatcher import CryptoDispatcher


@pytest.fixture
def dispatcher() -> CryptoDispatcher:
    return CryptoDispatcher()


@pytest.fixture
def estimator() -> PasswordStrengthEstimator:
    return PasswordStrengthEstimator()


@pytest.fixture
def config() -> ToolkitConfig:
    return ToolkitConfig()


@pytest.fixture
def engine(config: ToolkitConfig) -> VaultEngine:
    return VaultEngine(config)
