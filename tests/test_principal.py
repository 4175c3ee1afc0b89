import pytest

from krb5strength.errors import RejectKind
from krb5strength.principal import ERROR_USERNAME, check_principal, local_part


@pytest.mark.parametrize("principal,expected", [
    ("someuser@EXAMPLE.ORG", b"someuser"),
    ("admin/root@EXAMPLE.ORG", b"admin/root"),
    ("some\\@user@EXAMPLE.ORG", b"some\\@user"),
    ("back\\\\@EXAMPLE.ORG", b"back\\\\"),
    ("norealm", b"norealm"),
    ("@EXAMPLE.ORG", b""),
    ("trailing\\", b"trailing\\"),
])
def test_local_part(principal, expected):
    assert local_part(principal) == expected


@pytest.mark.parametrize("name,principal,password", [
    ("based on principal", "someuser@EXAMPLE.ORG", "someuser"),
    ("based on principal (case)", "someuser@EXAMPLE.ORG", "SomeUser"),
    ("based on principal (reversed)", "someuser@EXAMPLE.ORG", "resuemos"),
    ("based on principal with digits", "someuser@EXAMPLE.ORG", "someuser123"),
    ("is full principal", "test@EXAMPLE.ORG", "test@EXAMPLE.ORG"),
    ("is full principal (case)", "test@EXAMPLE.ORG", "TEST@example.org"),
    ("escaped at sign kept", "some\\@user@EXAMPLE.ORG", "some\\@user"),
    ("instance kept", "admin/root@EXAMPLE.ORG", "toor/nimda"),
])
def test_rejected(name, principal, password):
    rejection = check_principal(password, principal)
    assert rejection is not None, name
    assert rejection.kind is RejectKind.PRINCIPAL
    assert rejection.message == ERROR_USERNAME


@pytest.mark.parametrize("name,principal,password", [
    ("unrelated", "someuser@EXAMPLE.ORG", "correct horse"),
    ("leading digits", "someuser@EXAMPLE.ORG", "123someuser"),
    ("trailing letters", "someuser@EXAMPLE.ORG", "someuserx"),
    ("digits then letters", "someuser@EXAMPLE.ORG", "someuser1x"),
    ("shorter than user", "someuser@EXAMPLE.ORG", "some"),
    ("realm alone", "someuser@NEWEXAMPLE.ORG", "newexample"),
])
def test_accepted(name, principal, password):
    assert check_principal(password, principal) is None, name


def test_empty_local_part_boundary():
    # a principal starting with "@" has an empty local part, which matches
    # only the empty password directly and every all-digit password by suffix
    assert check_principal("", "@EXAMPLE.ORG") is not None
    assert check_principal("12345678", "@EXAMPLE.ORG") is not None
    assert check_principal("1234567a", "@EXAMPLE.ORG") is None


def test_does_not_touch_inputs():
    principal = bytearray(b"someuser@EXAMPLE.ORG")
    password = bytearray(b"resuemos")
    check_principal(password, principal)
    assert principal == bytearray(b"someuser@EXAMPLE.ORG")
    assert password == bytearray(b"resuemos")
