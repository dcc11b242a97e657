# 보안 유닛 테스트 (DB 의존성 없음)
from datetime import timedelta

import jwt
from bson import ObjectId

from user_api.core.security import (
    create_access_token,
    create_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_and_verify():
    pw = "S3cure!"
    hashed = get_password_hash(pw)
    assert hashed != pw
    assert verify_password(pw, hashed)
    assert not verify_password("wrong", hashed)


def test_password_hash_is_salted():
    assert get_password_hash("secret1") != get_password_hash("secret1")


def test_create_access_token(settings):
    user_id = str(ObjectId())
    token = create_access_token(user_id, settings)
    decoded = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert decoded["sub"] == user_id
    assert decoded["type"] == "access"
    assert decoded["exp"] - decoded["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


def test_decode_access_token_roundtrip(settings):
    user_id = str(ObjectId())
    assert decode_access_token(create_access_token(user_id, settings), settings) == user_id


def test_decode_rejects_expired_token(settings):
    token = create_token({"sub": str(ObjectId()), "type": "access"}, timedelta(seconds=-1), settings)
    assert decode_access_token(token, settings) is None


def test_decode_rejects_foreign_signature(settings):
    token = jwt.encode({"sub": str(ObjectId()), "type": "access"}, "another-secret-key-of-sufficient-size", algorithm="HS256")
    assert decode_access_token(token, settings) is None


def test_decode_rejects_non_access_token_and_bad_subject(settings):
    refresh = create_token({"sub": str(ObjectId()), "type": "refresh"}, timedelta(minutes=5), settings)
    bad_sub = create_token({"sub": "not-an-id", "type": "access"}, timedelta(minutes=5), settings)
    assert decode_access_token(refresh, settings) is None
    assert decode_access_token(bad_sub, settings) is None
    assert decode_access_token("garbage", settings) is None
