"""Unit tests for error kinds."""

from linkportal.core.errors import (
    LinkNotFoundError,
    LinkRemovalError,
    MembershipRemovalError,
    NoLinkError,
    NotFoundError,
    UpstreamError,
    status_code_of,
    wrap_error,
)


class CodedError(Exception):
    def __init__(self, code):
        super().__init__("coded")
        self.code = code


def test_status_codes() -> None:
    assert NotFoundError("x").status_code == 404
    assert NoLinkError("x").status_code == 404
    assert LinkNotFoundError("x").status_code == 404
    assert UpstreamError("x").status_code == 502
    assert UpstreamError("x", status_code=404).status_code == 404


def test_status_code_of_accepts_strings() -> None:
    assert status_code_of(CodedError("404")) == 404
    assert status_code_of(CodedError("ENOTFOUND")) is None
    assert status_code_of(RuntimeError("plain")) is None


def test_wrap_error_keeps_cause_and_status() -> None:
    cause = CodedError(404)

    wrapped = wrap_error(cause, "Could not do it.")

    assert isinstance(wrapped, UpstreamError)
    assert wrapped.message == "Could not do it."
    assert wrapped.status_code == 404
    assert wrapped.__cause__ is cause
    assert wrapped.inner_error is cause


def test_wrap_error_defaults_to_bad_gateway() -> None:
    assert wrap_error(RuntimeError("x"), "failed").status_code == 502


def test_removal_errors_carry_history() -> None:
    cause = LinkNotFoundError("gone")

    link_error = LinkRemovalError("The link no longer exists", error=cause, history=["a"])
    membership_error = MembershipRemovalError(RuntimeError("nope"), ["b"])

    assert link_error.status_code == 404
    assert link_error.history == ["a"]
    assert membership_error.status_code == 500
    assert membership_error.message == "nope"
    assert membership_error.history == ["b"]
