"""Tests for the identifier case policy."""

from table_connector.connector.identifiers import IdentifierPolicy

from tests.fakes import FakeBackend, FakeMetadata


def test_policy_from_upper_case_backend():
    """A backend storing upper-case identifiers yields an upper-casing policy."""
    policy = IdentifierPolicy.for_metadata(FakeMetadata(FakeBackend(upper_case=True)))

    assert policy.upper_case is True
    assert policy.normalize("orders") == "ORDERS"
    assert policy.normalize("Order_Items") == "ORDER_ITEMS"


def test_policy_from_case_preserving_backend():
    """Identifiers pass through unchanged otherwise."""
    policy = IdentifierPolicy.for_metadata(FakeMetadata(FakeBackend(upper_case=False)))

    assert policy.upper_case is False
    assert policy.normalize("Orders") == "Orders"


def test_upper_casing_is_locale_independent():
    """Upper-casing uses full Unicode case mapping, not the process locale."""
    policy = IdentifierPolicy(upper_case=True)

    assert policy.normalize("title") == "TITLE"
    assert policy.normalize("straße") == "STRASSE"
