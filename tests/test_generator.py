"""
Tests for token generation and entropy fallback.
"""

import re

from publana.modules.tokens import TOKEN_LENGTH, TokenGenerator
from publana.modules.tokens.generator import PASSWORD_ALPHABET, generate_password

HEX_TOKEN = re.compile(r"^[0-9a-f]{64}$")


def test_generates_64_hex_characters():
    """Test default generation yields 64 lowercase hex characters."""
    token = TokenGenerator().generate()

    assert len(token) == TOKEN_LENGTH == 64
    assert HEX_TOKEN.match(token)


def test_no_duplicates_in_sample():
    """Test generated tokens are unique across a practical sample."""
    generator = TokenGenerator()
    tokens = {generator.generate() for _ in range(2000)}

    assert len(tokens) == 2000
    assert all(HEX_TOKEN.match(token) for token in tokens)


def test_falls_back_to_secondary_source():
    """Test an unavailable primary source is skipped."""
    calls = []

    def primary(n):
        calls.append("primary")
        raise NotImplementedError("no getrandom")

    def secondary(n):
        calls.append("secondary")
        return bytes(range(1, n + 1))

    token = TokenGenerator(sources=[primary, secondary]).generate()

    assert calls == ["primary", "secondary"]
    assert token == bytes(range(1, 33)).hex()


def test_skips_zero_entropy_source():
    """Test an all-zero source is never used."""
    token = TokenGenerator(sources=[lambda n: bytes(n), lambda n: b"\x07" * n]).generate()

    assert token == "07" * 32


def test_falls_back_to_password_generator():
    """Test the password generator is the last resort."""

    def broken(n):
        raise OSError("entropy pool unavailable")

    token = TokenGenerator(sources=[broken, broken]).generate()

    assert len(token) == 64
    assert set(token) <= set(PASSWORD_ALPHABET)


def test_password_generator_uses_injected_fallback():
    """Test a custom password generator receives the token length."""
    seen = []

    def fallback(length):
        seen.append(length)
        return "x" * length

    token = TokenGenerator(sources=[], password_generator=fallback).generate()

    assert seen == [64]
    assert token == "x" * 64


def test_generate_password_alphabet():
    password = generate_password(128)
    assert len(password) == 128
    assert password.isalnum()
