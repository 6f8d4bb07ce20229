"""Tests for CRM resource models.

Tests cover:
- Property accessor (absent vs null)
- Namespaced association lookup
- Wire-shape decoding of associations
- Immutability
- Owner decoding
"""

import pytest
from pydantic import ValidationError

from hubcrm.crm.models import (
    AssociationLink,
    AssociationSpec,
    Owner,
    Resource,
    association_key,
)


@pytest.fixture
def training_contact() -> Resource:
    return Resource.model_validate(
        {
            "id": "101",
            "properties": {"email": "jane@example.com", "phone": None},
            "associations": {"p42_trainings": {"results": [{"id": "7", "type": "X"}]}},
        }
    )


class TestResourceProperties:
    """Tests for property access."""

    def test_present_value(self, training_contact):
        assert training_contact.get_property("email") == "jane@example.com"

    def test_absent_and_null_both_read_empty(self, training_contact):
        """Absent and null collapse to "" at the accessor."""
        assert training_contact.get_property("phone") == ""
        assert training_contact.get_property("city") == ""

    def test_null_preserved_internally(self, training_contact):
        """The model still tells null apart from absent."""
        assert training_contact.has_property("phone") is True
        assert training_contact.properties["phone"] is None
        assert training_contact.has_property("city") is False

    def test_null_survives_dump(self, training_contact):
        dumped = training_contact.model_dump()
        assert "phone" in dumped["properties"]
        assert dumped["properties"]["phone"] is None

    def test_null_properties_payload(self):
        resource = Resource.model_validate({"id": "1", "properties": None})
        assert resource.properties == {}


class TestResourceAssociations:
    """Tests for namespaced association lookup."""

    def test_association_key(self):
        assert association_key("42", "trainings") == "p42_trainings"

    def test_lookup_under_matching_account(self, training_contact):
        links = training_contact.get_associations("trainings", "42")
        assert links == [AssociationLink(id="7", type="X")]

    def test_lookup_under_other_account_is_empty(self, training_contact):
        assert training_contact.get_associations("trainings", "43") == []

    def test_unknown_relation_is_empty(self, training_contact):
        assert training_contact.get_associations("sessions", "42") == []

    def test_order_preserved(self):
        resource = Resource.model_validate(
            {
                "id": "1",
                "associations": {
                    "p1_sessions": {"results": [{"id": "3", "type": "a"}, {"id": "1", "type": "b"}]}
                },
            }
        )
        assert [link.id for link in resource.get_associations("sessions", "1")] == ["3", "1"]

    def test_empty_results_key(self):
        resource = Resource.model_validate({"id": "1", "associations": {"p1_x": {}}})
        assert resource.get_associations("x", "1") == []

    def test_lookup_returns_copy(self, training_contact):
        links = training_contact.get_associations("trainings", "42")
        links.clear()
        assert len(training_contact.get_associations("trainings", "42")) == 1


class TestResourceImmutability:
    """Tests that a resource id cannot change."""

    def test_id_is_frozen(self, training_contact):
        with pytest.raises(ValidationError):
            training_contact.id = "999"

    def test_defaults_before_creation(self):
        resource = Resource(object_type_id="0-1", properties={"email": "a@b.c"})
        assert resource.id == ""
        assert resource.associations == {}


class TestAssociationSpec:
    """Tests for association create inputs."""

    def test_to_renders_input(self):
        spec = AssociationSpec(category="USER_DEFINED", type_id=290)
        assert spec.to("55") == {
            "to": {"id": "55"},
            "types": [{"associationCategory": "USER_DEFINED", "associationTypeId": 290}],
        }


class TestOwner:
    """Tests for owner decoding."""

    def test_decode_wire_shape(self):
        owner = Owner.model_validate(
            {
                "id": "9",
                "email": "owner@example.com",
                "firstName": "Ada",
                "lastName": "Lovelace",
                "userId": 1234,
                "archived": False,
                "teams": [],
            }
        )
        assert owner.id == "9"
        assert owner.user_id == 1234
        assert owner.full_name == "Ada Lovelace"

    def test_numeric_id_and_null_names(self):
        owner = Owner.model_validate({"id": 9, "firstName": None, "lastName": "Solo"})
        assert owner.id == "9"
        assert owner.first_name == ""
        assert owner.full_name == "Solo"

    def test_missing_id_fails(self):
        with pytest.raises(ValidationError):
            Owner.model_validate({"email": "x@y.z"})
