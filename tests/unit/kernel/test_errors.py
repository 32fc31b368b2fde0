"""Unit tests for the kernel error hierarchy."""
from __future__ import annotations

import json

from stackforge.kernel.errors import (
    ArchiveStreamingError,
    BaseError,
    CallTimeoutError,
    CircuitOpenError,
    DependencyDegradedError,
    DomainError,
    InfrastructureError,
    SerializationError,
    StackInDevelopmentError,
    StackNotFoundError,
    StackRequestError,
    UnsupportedStackError,
    ValidationError,
)


class TestBaseError:
    def test_to_dict_and_str(self) -> None:
        cause = OSError("disk")
        err = BaseError("failed", code="custom", detail={"k": 1}, cause=cause)
        payload = err.to_dict()
        assert payload == {"code": "custom", "message": "failed", "detail": {"k": 1}, "cause": repr(cause)}
        assert json.loads(str(err))["code"] == "custom"
        assert err.__cause__ is cause

    def test_default_code(self) -> None:
        assert SerializationError("bad").code == "serialization_error"


class TestStackRequestErrors:
    def test_hierarchy(self) -> None:
        for cls in (UnsupportedStackError, StackInDevelopmentError, StackNotFoundError):
            assert issubclass(cls, StackRequestError)
            assert issubclass(cls, ValidationError)
            assert issubclass(cls, DomainError)

    def test_status_codes(self) -> None:
        assert UnsupportedStackError("e", "m").status_code == 400
        assert StackInDevelopmentError("e", "m").status_code == 404
        assert StackNotFoundError("e", "m").status_code == 404
        assert StackRequestError("e", "m", status_code=418).status_code == 418

    def test_problem_omits_empty_details(self) -> None:
        assert StackNotFoundError("Stack not found", "nope").to_problem() == {
            "statusCode": 404,
            "error": "Stack not found",
            "message": "nope",
        }

    def test_details_also_land_in_detail(self) -> None:
        err = UnsupportedStackError("e", "m", details={"compatibleOptions": ["express"]})
        assert err.to_dict()["detail"] == {"compatibleOptions": ["express"]}


class TestInfrastructureErrors:
    def test_circuit_open(self) -> None:
        err = CircuitOpenError("cache-get")
        assert isinstance(err, DependencyDegradedError)
        assert isinstance(err, InfrastructureError)
        assert err.dependency == "cache-get"
        assert err.to_dict()["circuit_name"] == "cache-get"

    def test_call_timeout(self) -> None:
        err = CallTimeoutError("mongodb-find-users", 5.0)
        assert err.timeout_seconds == 5.0
        assert "5.0s" in err.message

    def test_archive_streaming(self) -> None:
        err = ArchiveStreamingError("react-express", "compress")
        assert err.detail == {"stack_id": "react-express", "phase": "compress"}
        assert "react-express" in err.message
