import pytest
from core.exceptions import Forbidden
from core.policy import Capability, granted, ensure_owner, scope_to_caller

BUYER = {"email": "a@x.com", "role": "user"}
LIBRARIAN = {"email": "lib@x.com", "role": "librarian"}


def test_capabilities():
    assert granted(None, Capability.ANONYMOUS)
    assert not granted(None, Capability.SELF)
    assert granted(BUYER, Capability.SELF)
    assert not granted(BUYER, Capability.OPERATOR)
    assert granted(LIBRARIAN, Capability.OPERATOR)


def test_ensure_owner():
    ensure_owner(BUYER, "a@x.com")
    ensure_owner(LIBRARIAN, "a@x.com")

    with pytest.raises(Forbidden):
        ensure_owner(LIBRARIAN, "a@x.com", allow_operator=False)
    with pytest.raises(Forbidden):
        ensure_owner(BUYER, "b@y.com")


def test_scope_to_caller():
    assert scope_to_caller(BUYER, None) == "a@x.com"
    assert scope_to_caller(BUYER, "a@x.com") == "a@x.com"
    assert scope_to_caller(LIBRARIAN, None) is None
    assert scope_to_caller(LIBRARIAN, "b@y.com") == "b@y.com"

    with pytest.raises(Forbidden):
        scope_to_caller(BUYER, "b@y.com")
