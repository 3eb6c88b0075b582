from __future__ import annotations

import pytest

from src.ussd.outcome import Failure, FailureKind
from src.ussd.request import UssdRequest, validate

SUB_INT = "Parameter `subscriptionId` must be an int"
SUB_NEG = "Parameter `subscriptionId` must be >= 0"
CODE_STR = "Parameter `code` must be a String"
CODE_EMPTY = "Parameter `code` must not be empty"


def _invalid(message: str) -> Failure:
    return Failure(FailureKind.INVALID_PARAMETERS, message)


def test_valid_request_keeps_fields_exactly() -> None:
    request = validate({"subscriptionId": 0, "code": "*123#"})
    assert request == UssdRequest(subscription_id=0, code="*123#")


def test_code_is_not_trimmed() -> None:
    request = validate({"subscriptionId": 3, "code": " *100# "})
    assert isinstance(request, UssdRequest)
    assert request.code == " *100# "


@pytest.mark.parametrize("args", [
    {"code": "*123#"},
    {"subscriptionId": None, "code": "*123#"},
    {"subscriptionId": "1", "code": "*123#"},
    {"subscriptionId": 1.0, "code": "*123#"},
    {"subscriptionId": True, "code": "*123#"},
    {},
    None,
])
def test_subscription_id_must_be_int(args) -> None:
    assert validate(args) == _invalid(SUB_INT)


@pytest.mark.parametrize("sub_id", [-1, -42])
def test_subscription_id_must_not_be_negative(sub_id: int) -> None:
    assert validate({"subscriptionId": sub_id, "code": "*123#"}) == _invalid(SUB_NEG)


@pytest.mark.parametrize("code", [None, 123, b"*123#", ["*123#"]])
def test_code_must_be_string(code) -> None:
    args = {"subscriptionId": 0}
    if code is not None:
        args["code"] = code
    assert validate(args) == _invalid(CODE_STR)


def test_code_must_not_be_empty() -> None:
    assert validate({"subscriptionId": 0, "code": ""}) == _invalid(CODE_EMPTY)


def test_subscription_checks_run_before_code_checks() -> None:
    assert validate({"subscriptionId": -1, "code": ""}) == _invalid(SUB_NEG)
    assert validate({"subscriptionId": "x"}) == _invalid(SUB_INT)


def test_non_mapping_arguments() -> None:
    assert validate(["subscriptionId", 0]) == _invalid(SUB_INT)
