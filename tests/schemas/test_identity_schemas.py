"""Identity Schemas — registration rules and email normalization."""

import pytest
from pydantic import ValidationError

from biblioteca.schemas.identity import LoginRequest, RegisterRequest


def test_email_is_normalized():
    req = RegisterRequest(username="ana", email=" Ana@Example.COM ", password="s3cret-pass")
    assert req.email == "ana@example.com"


def test_invalid_email_rejected():
    with pytest.raises(ValidationError):
        RegisterRequest(username="ana", email="ana.example.com", password="s3cret-pass")


def test_short_password_rejected():
    with pytest.raises(ValidationError):
        RegisterRequest(username="ana", email="ana@example.com", password="1234567")


def test_password_over_bcrypt_limit_rejected():
    # 25 three-byte characters = 75 bytes
    with pytest.raises(ValidationError):
        RegisterRequest(username="ana", email="ana@example.com", password="€" * 25)


def test_blank_username_rejected():
    with pytest.raises(ValidationError):
        RegisterRequest(username="  ", email="ana@example.com", password="s3cret-pass")


def test_login_applies_no_password_rules():
    req = LoginRequest(email="ANA@example.com", password="x")
    assert req.email == "ana@example.com"
    assert req.password == "x"
