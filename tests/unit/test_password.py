# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for password hashing utilities."""

import pytest

from learnhub.domains.auth.password import PasswordHasher


class TestPasswordHasher:
    """Tests for PasswordHasher class."""

    def test_hash_password_returns_bcrypt_hash(self) -> None:
        """Test that hashing returns a bcrypt hash string."""
        hasher = PasswordHasher(rounds=4)

        hashed = hasher.hash("secret1")

        assert hashed.startswith("$2b$04$")
        assert len(hashed) == 60

    def test_hash_produces_different_hashes_for_same_password(self) -> None:
        """Test that hashing the same password twice yields different salts."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.hash("secret1") != hasher.hash("secret1")

    def test_verify_correct_password(self) -> None:
        """Test that verification succeeds with the correct password."""
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("secret1")

        assert hasher.verify("secret1", hashed) is True

    def test_verify_incorrect_password(self) -> None:
        """Test that verification fails with a wrong password."""
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("secret1")

        assert hasher.verify("secret2", hashed) is False

    def test_verify_empty_inputs_return_false(self) -> None:
        """Test that empty password or hash never verifies."""
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("secret1")

        assert hasher.verify("", hashed) is False
        assert hasher.verify("secret1", "") is False

    def test_verify_invalid_hash_returns_false(self) -> None:
        """Test that a malformed hash counts as a mismatch."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.verify("secret1", "not-a-bcrypt-hash") is False

    def test_hash_empty_password_raises(self) -> None:
        """Test that hashing an empty password raises ValueError."""
        hasher = PasswordHasher(rounds=4)

        with pytest.raises(ValueError, match="empty"):
            hasher.hash("")

    def test_hash_password_over_72_bytes_raises(self) -> None:
        """Test that passwords bcrypt would truncate are refused."""
        hasher = PasswordHasher(rounds=4)

        with pytest.raises(ValueError, match="72 bytes"):
            hasher.hash("a" * 73)

    def test_verify_password_over_72_bytes_returns_false(self) -> None:
        """Test that an over-long password never verifies."""
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("a" * 72)

        assert hasher.verify("a" * 73, hashed) is False
