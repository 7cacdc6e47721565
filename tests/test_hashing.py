from __future__ import annotations

from typespub.hashing import HASH_LENGTH, compute_hash


def test_compute_hash_is_deterministic_and_fixed_length() -> None:
    first = compute_hash("declare module 'a' {}")
    second = compute_hash("declare module 'a' {}")

    assert first == second
    assert len(first) == HASH_LENGTH
    assert len(compute_hash("")) == HASH_LENGTH


def test_compute_hash_known_value() -> None:
    # sha256("") in base64
    assert compute_hash("") == "47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="


def test_compute_hash_sensitive_to_single_character() -> None:
    assert compute_hash("abc") != compute_hash("abd")


def test_compute_hash_encodes_utf8() -> None:
    assert compute_hash("café") != compute_hash("cafe")
