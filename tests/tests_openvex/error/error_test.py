import pytest

from openvex.error import (
    ActionStatementRequiredError,
    DocumentRoleError,
    JustificationRequiredError,
    NoStatementsError,
    VexError,
    VexFormatError,
    VexStateError,
)


def test_vexerror():
    err = None

    try:
        raise VexError(None)
    except VexError as basicerr:
        assert str(basicerr) == "VexError"

    try:
        raise VexError(None, origin="here")
    except VexError as err0:
        err = err0
        assert str(err).strip() == "here: VexError"

    try:
        raise VexError("one", origin="here")
    except VexError as err1:
        err += err1

    try:
        raise VexError(["two"])
    except VexError as err2:
        err += err2
    assert str(err).strip() == "here: two"

    assert err.messages == ["one", "two"]

    err += "three"
    assert err.messages == ["one", "two", "three"]


@pytest.mark.parametrize(
    "error_class",
    [
        NoStatementsError,
        JustificationRequiredError,
        ActionStatementRequiredError,
        DocumentRoleError,
    ],
)
def test_state_errors(error_class):
    with pytest.raises(VexStateError) as err:
        raise error_class("invalid state")
    assert isinstance(err.value, VexError)
    assert not isinstance(err.value, VexFormatError)
    assert str(err.value) == "invalid state"
