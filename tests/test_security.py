from datetime import timedelta

import pytest
from jose import jwt

from app.shared.config.settings import get_settings
from app.shared.core.exceptions import InvalidTokenError, TokenExpiredError
from app.shared.core.security import get_security_manager


@pytest.fixture
def security():
    return get_security_manager()


def test_token_round_trip(security):
    token = security.create_access_token("c6a7f5a6-0a1e-4a57-9a34-2f0d4c2b5d11")
    payload = security.verify_token(token)
    assert payload["sub"] == "c6a7f5a6-0a1e-4a57-9a34-2f0d4c2b5d11"
    assert payload["type"] == "access"


def test_tokens_do_not_expire_by_default(security):
    payload = security.verify_token(security.create_access_token("user-1"))
    assert "exp" not in payload


def test_expired_token_is_rejected(security):
    token = security.create_access_token("user-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(TokenExpiredError):
        security.verify_token(token)


def test_foreign_signature_is_rejected(security):
    token = jwt.encode({"sub": "user-1", "type": "access"}, "another-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        security.verify_token(token)


def test_wrong_token_type_is_rejected(security):
    settings = get_settings()
    token = jwt.encode({"sub": "user-1", "type": "refresh"}, settings.JWT_SECRET_KEY, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        security.verify_token(token)


def test_password_hashing(security):
    hashed = security.get_password_hash("Secret123!")
    assert hashed != "Secret123!"
    assert security.verify_password("Secret123!", hashed)
    assert not security.verify_password("wrong-password", hashed)
    assert not security.verify_password("Secret123!", "not-a-bcrypt-hash")
