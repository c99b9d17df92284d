"""Unit tests for access tokens."""

import uuid
from datetime import timedelta

from jose import jwt

from tsea.kernel.identity.jwt import JWTManager


class TestJWTManager:
    def test_round_trip(self, jwt_manager: JWTManager):
        user_id = uuid.uuid4()
        token, expires_in = jwt_manager.create_access_token(user_id, "learner@example.com")

        payload = jwt_manager.verify_access_token(token)
        assert payload is not None
        assert payload.sub == str(user_id)
        assert payload.email == "learner@example.com"
        assert expires_in == 30 * 60

    def test_expired_token_rejected(self, jwt_manager: JWTManager):
        token, _ = jwt_manager.create_access_token(
            uuid.uuid4(), "a@example.com", expires_delta=timedelta(seconds=-5)
        )
        assert jwt_manager.verify_access_token(token) is None

    def test_wrong_secret_rejected(self, jwt_manager: JWTManager):
        token, _ = jwt_manager.create_access_token(uuid.uuid4(), "a@example.com")
        other = JWTManager(secret_key="another-secret-key-for-testing", algorithm="HS256")
        assert other.verify_access_token(token) is None

    def test_non_access_token_rejected(self, jwt_manager: JWTManager):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "email": "a@example.com", "type": "refresh"},
            jwt_manager.secret_key,
            algorithm=jwt_manager.algorithm,
        )
        assert jwt_manager.verify_access_token(token) is None

    def test_garbage_rejected(self, jwt_manager: JWTManager):
        assert jwt_manager.verify_access_token("not.a.token") is None
