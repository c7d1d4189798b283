from woodys.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    WoodysError,
)


def test_status_codes():
    assert ValidationError("title", "bad").status_code == 400
    assert NotFoundError("x").status_code == 404
    assert ConflictError("x").status_code == 409
    assert UnauthorizedError("x").status_code == 403
    assert InternalError("x").status_code == 500


def test_with_context_keeps_kind_and_cause():
    original = NotFoundError.for_entity("project", 12)
    wrapped = original.with_context("failed to rate project")
    assert isinstance(wrapped, NotFoundError)
    assert str(wrapped) == "failed to rate project: project 12 not found"
    assert wrapped.__cause__ is original


def test_validation_error_context_keeps_field():
    err = ValidationError("title", "title is required").with_context("failed to create project")
    assert isinstance(err, ValidationError)
    assert err.field == "title"
    assert err.message == "failed to create project: title: title is required"
    assert err.to_dict() == {
        "detail": "failed to create project: title: title is required",
        "error": "validation",
        "field": "title",
    }


def test_all_kinds_share_base():
    for err in (ConflictError("a"), UnauthorizedError("b"), InternalError("c")):
        assert isinstance(err, WoodysError)
        assert err.to_dict()["detail"] == err.message
