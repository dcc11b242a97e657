# 검증 게이트 테스트
# - 작은 FastAPI 앱에 게이트 + 에러 싱크만 붙여서 확인합니다
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, model_validator

from user_api.core.errors import register_error_handlers
from user_api.core.validation import format_validation_errors, validate
from user_api.schemas.user_schema import CreateUserRequest, UpdateUserRequest, UserIdRequest


class ExplodingBody(BaseModel):
    value: int

    @model_validator(mode="after")
    def _explode(self):
        raise RuntimeError("validator bug")


class ExplodingRequest(BaseModel):
    body: ExplodingBody


@pytest.fixture
def gate_client():
    app = FastAPI()
    register_error_handlers(app)
    reached = []

    @app.post("/users")
    async def create(payload: CreateUserRequest = Depends(validate(CreateUserRequest))):
        reached.append("create")
        return payload.body.model_dump()

    @app.patch("/users/{id}")
    async def update(
        req: UserIdRequest = Depends(validate(UserIdRequest)),
        payload: UpdateUserRequest = Depends(validate(UpdateUserRequest)),
    ):
        reached.append("update")
        return {"id": req.params.id, **payload.body.changes()}

    @app.get("/users/{id}")
    async def read(req: UserIdRequest = Depends(validate(UserIdRequest))):
        reached.append("read")
        return {"id": req.params.id}

    @app.post("/explode")
    async def explode(payload: ExplodingRequest = Depends(validate(ExplodingRequest))):
        reached.append("explode")
        return {}

    client = TestClient(app, raise_server_exceptions=False)
    client.reached = reached
    return client


def test_valid_request_reaches_handler_with_trimmed_values(gate_client):
    r = gate_client.post("/users", json={"name": "  Al ", "email": " a@x.com ", "password": "secret1"})
    assert r.status_code == 200, r.text
    assert r.json() == {"name": "Al", "email": "a@x.com", "password": "secret1"}
    assert gate_client.reached == ["create"]


def test_all_violations_joined_in_declaration_order(gate_client):
    r = gate_client.post("/users", json={"password": "123", "email": "nope", "name": "A"})
    assert r.status_code == 400
    assert r.json() == {
        "status": "fail",
        "message": (
            "body.name: Name must be at least 2 characters long, "
            "body.email: Invalid email address, "
            "body.password: Password must be at least 6 characters long"
        ),
    }
    assert gate_client.reached == []


def test_missing_fields_and_wrong_types(gate_client):
    r = gate_client.post("/users", json={"name": 42})
    assert r.status_code == 400
    assert r.json()["message"] == "body.name: Expected string, body.email: Required, body.password: Required"


def test_empty_and_malformed_bodies(gate_client):
    empty = gate_client.post("/users")
    assert empty.status_code == 400
    assert empty.json()["message"] == "body.name: Required, body.email: Required, body.password: Required"

    broken = gate_client.post("/users", content=b"{not json", headers={"Content-Type": "application/json"})
    assert broken.status_code == 400
    assert broken.json()["message"] == "body: Malformed JSON body"

    not_object = gate_client.post("/users", json=[1, 2])
    assert not_object.status_code == 400
    assert not_object.json()["message"] == "body: Expected object"


def test_update_requires_at_least_one_known_field(gate_client):
    for body in ({}, {"role": "admin"}):
        r = gate_client.patch("/users/abc", json=body)
        assert r.status_code == 400
        assert r.json()["message"] == "body: At least one field must be provided for update"
    assert gate_client.reached == []


def test_update_rejects_explicit_null(gate_client):
    r = gate_client.patch("/users/abc", json={"name": None})
    assert r.status_code == 400
    assert r.json()["message"] == "body.name: Expected string"


def test_gates_compose(gate_client):
    r = gate_client.patch("/users/abc", json={"email": "New@X.com"})
    assert r.status_code == 200
    assert r.json() == {"id": "abc", "email": "New@X.com"}
    assert gate_client.reached == ["update"]


def test_unexpected_validator_failure_is_not_masked_as_400(gate_client):
    r = gate_client.post("/explode", json={"value": 1})
    assert r.status_code == 500
    assert r.json() == {"status": "error", "message": "Something went wrong"}
    assert "validator bug" not in r.text
    assert gate_client.reached == []


def test_format_validation_errors_handles_root_and_index_locations():
    errors = [
        {"loc": (), "msg": "whole thing is wrong", "type": "value_error"},
        {"loc": ("body", "tags", 0), "msg": "Input should be a valid string", "type": "string_type"},
    ]
    assert format_validation_errors(errors) == "whole thing is wrong, body.tags.0: Expected string"


def test_display_name_email_form_is_rejected(gate_client):
    r = gate_client.post("/users", json={"name": "Al", "email": "Al <a@x.com>", "password": "secret1"})
    assert r.status_code == 400
    assert r.json()["message"] == "body.email: Invalid email address"

    r = gate_client.patch("/users/abc", json={"email": "Bob <b@x.com>"})
    assert r.status_code == 400
    assert r.json()["message"] == "body.email: Invalid email address"
    assert gate_client.reached == []


def test_params_only_gate_ignores_request_body(gate_client):
    r = gate_client.request(
        "GET", "/users/abc", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 200, r.text
    assert r.json() == {"id": "abc"}
    assert gate_client.reached == ["read"]
