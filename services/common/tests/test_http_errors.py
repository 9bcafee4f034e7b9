"""
Unit tests for HTTP error handling functionality.

Covers conversion of exceptions to failure envelopes and the FastAPI
handlers that return them.
"""

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from services.common.http_errors import (
    BadRequestError,
    ConflictError,
    ErrorCode,
    NotFoundError,
    ServiceError,
    ValidationError,
    exception_to_response,
    register_exception_handlers,
    request_id_var,
)


class TestExceptionToResponse:
    """Test conversion of exceptions to envelopes."""

    def setup_method(self):
        request_id_var.set("uninitialized")

    def test_validation_error(self):
        error = ValidationError(["The Name field is required."])

        response = exception_to_response(error)

        assert response.status_code == 400
        assert response.success is False
        assert response.message == "Validation failed"
        assert response.errors == ["The Name field is required."]
        assert response.data is None
        assert error.error_code == ErrorCode.VALIDATION_FAILED

    def test_not_found_error(self):
        error = NotFoundError(
            "Contact", 42, errors=["The requested contact does not exist."]
        )

        response = exception_to_response(error)

        assert response.status_code == 404
        assert response.message == "Contact not found"
        assert response.errors == ["The requested contact does not exist."]
        assert error.details == {"resource": "Contact", "identifier": 42}

    def test_not_found_error_defaults_errors_to_message(self):
        response = exception_to_response(NotFoundError("Contact"))

        assert response.errors == ["Contact not found"]

    def test_conflict_error(self):
        response = exception_to_response(
            ConflictError("Duplicate contact detected", errors=["a", "b"])
        )

        assert response.status_code == 409
        assert response.errors == ["a", "b"]

    def test_service_error(self):
        error = ServiceError("Failed to list contacts")

        response = exception_to_response(error)

        assert response.status_code == 500
        assert response.message == "Failed to list contacts"
        assert response.errors == ["Failed to list contacts"]
        assert error.error_code == ErrorCode.INTERNAL_ERROR
        assert error.error_type == "service_error"

    def test_bad_request_error(self):
        response = exception_to_response(
            BadRequestError(
                "Invalid page size", errors=["Page size must be greater than 0."]
            )
        )

        assert response.status_code == 400
        assert response.message == "Invalid page size"

    def test_http_exception_with_dict_detail(self):
        response = exception_to_response(
            HTTPException(status_code=403, detail={"error": "Access denied"})
        )

        assert response.status_code == 403
        assert response.message == "Access denied"

    def test_generic_exception_hides_details(self):
        response = exception_to_response(RuntimeError("password=hunter2"))

        assert response.status_code == 500
        assert response.message == "Internal server error"
        assert "hunter2" not in " ".join(response.errors or [])

    def test_request_id_from_context(self):
        request_id_var.set("test-request-123")

        assert NotFoundError("Contact").request_id == "test-request-123"

    def test_request_id_generated_outside_request(self):
        error = NotFoundError("Contact")

        assert error.request_id != "uninitialized"
        assert len(error.request_id) == 36


class Payload(BaseModel):
    count: int


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/conflict")
    async def conflict():
        raise ConflictError("Duplicate contact detected", errors=["taken"])

    @app.post("/payload")
    async def payload(body: Payload):
        return {"count": body.count}

    return app


class TestRegisteredHandlers:
    """Handlers render envelopes with camelCase keys."""

    def setup_method(self):
        self.client = TestClient(build_app())

    def test_api_exception_rendered_as_envelope(self):
        response = self.client.get("/conflict")

        assert response.status_code == 409
        assert response.json() == {
            "statusCode": 409,
            "success": False,
            "message": "Duplicate contact detected",
            "data": None,
            "errors": ["taken"],
        }

    def test_request_validation_becomes_400(self):
        response = self.client.post("/payload", json={"count": "many"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert body["errors"][0].startswith("count:")

    def test_unknown_route_is_enveloped(self):
        response = self.client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["statusCode"] == 404
        assert response.json()["success"] is False
