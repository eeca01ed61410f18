"""Tests for the random password generator."""

from __future__ import annotations

import string

import pytest

from vault.analyzers.password_generator import (
    LOWERCASE,
    NUMBERS,
    SYMBOLS,
    UPPERCASE,
    PasswordGenerator,
)


@pytest.fixture
def generator() -> PasswordGenerator:
    return PasswordGenerator()


@pytest.mark.parametrize("length", [8, 16, 32])
def test_exact_length(generator: PasswordGenerator, length: int) -> None:
    assert len(generator.generate(length)) == length


def test_characters_come_from_pool(generator: PasswordGenerator) -> None:
    pool = set(UPPERCASE + LOWERCASE + NUMBERS + SYMBOLS)
    for _ in range(20):
        assert set(generator.generate(32)) <= pool


def test_single_class(generator: PasswordGenerator) -> None:
    password = generator.generate(20, uppercase=False, lowercase=False, numbers=True, symbols=False)
    assert set(password) <= set(string.digits)


def test_no_class_falls_back_to_lowercase_and_digits(generator: PasswordGenerator) -> None:
    pool, classes = PasswordGenerator.build_pool(False, False, False, False)
    assert pool == LOWERCASE + NUMBERS
    assert classes == ["lowercase", "numbers"]
    password = generator.generate(24, False, False, False, False)
    assert set(password) <= set(LOWERCASE + NUMBERS)


def test_build_pool_names() -> None:
    _, classes = PasswordGenerator.build_pool(uppercase=True, lowercase=False, numbers=True, symbols=False)
    assert classes == ["uppercase", "numbers"]


@pytest.mark.parametrize("length", [0, 7, 33, -1])
def test_length_out_of_range(generator: PasswordGenerator, length: int) -> None:
    with pytest.raises(ValueError):
        generator.generate(length)


def test_custom_range() -> None:
    generator = PasswordGenerator(min_length=4, max_length=6)
    assert len(generator.generate(4)) == 4
    with pytest.raises(ValueError):
        generator.generate(8)


@pytest.mark.parametrize("bounds", [(0, 10), (10, 5)])
def test_invalid_range(bounds: tuple[int, int]) -> None:
    with pytest.raises(ValueError):
        PasswordGenerator(*bounds)


def test_passwords_differ(generator: PasswordGenerator) -> None:
    assert len({generator.generate(16) for _ in range(10)}) == 10


def test_generate_assessed(generator: PasswordGenerator) -> None:
    result = generator.generate_assessed(20, symbols=False)
    assert result.length == 20
    assert len(result.password) == 20
    assert result.character_classes == ["uppercase", "lowercase", "numbers"]
    assert 0 <= result.assessment.score <= 8
    assert "Add symbols" in result.assessment.feedback


def test_generated_password_repr_hides_secret(generator: PasswordGenerator) -> None:
    result = generator.generate_assessed(16)
    assert result.password not in repr(result)
