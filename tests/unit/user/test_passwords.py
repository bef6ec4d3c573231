"""Tests for bcrypt password hashing."""

from blognote.core.modules.user.passwords import check_password, hash_password


def test_hash_is_not_plaintext():
    digest = hash_password("secret", rounds=4)
    assert digest != "secret"
    assert digest.startswith("$2b$04$")


def test_same_password_hashes_differently():
    assert hash_password("secret", rounds=4) != hash_password("secret", rounds=4)


def test_check_matching_password():
    digest = hash_password("secret", rounds=4)
    assert check_password("secret", digest) is True


def test_check_wrong_password():
    digest = hash_password("secret", rounds=4)
    assert check_password("Secret", digest) is False


def test_check_against_malformed_hash_is_false():
    assert check_password("secret", "not-a-bcrypt-hash") is False
