"""Generic CRM resource models.

A Resource is any remote CRM object (contact, company, custom object...).
Properties keep their optional values so an explicit null survives a
decode; the accessors collapse absent and null to "".

Association keys arrive namespaced by account: p<accountId>_<relation>.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def association_key(account_id: str, relation: str) -> str:
    """Build the namespaced association key for a relation."""
    return f"p{account_id}_{relation}"


class AssociationLink(BaseModel):
    """Link from one resource to a related object."""

    id: str
    type: str = ""

    model_config = ConfigDict(frozen=True)


class AssociationSpec(BaseModel):
    """Association category and type id used when creating objects.

    Renders the CRM v3 association input for a create call.
    """

    category: str
    type_id: int

    model_config = ConfigDict(frozen=True)

    def to(self, object_id: str) -> Dict[str, Any]:
        """Association input pointing at object_id."""
        return {
            "to": {"id": object_id},
            "types": [
                {
                    "associationCategory": self.category,
                    "associationTypeId": self.type_id,
                }
            ],
        }


class Resource(BaseModel):
    """Generic remote CRM object.

    Frozen: the id of a fetched or created record never changes.
    """

    internal_name: str = ""
    object_type_id: str = ""
    id: str = ""
    properties: Dict[str, Optional[str]] = Field(default_factory=dict)
    associations: Dict[str, List[AssociationLink]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("properties", mode="before")
    @classmethod
    def _default_properties(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("associations", mode="before")
    @classmethod
    def _flatten_associations(cls, v: Any) -> Any:
        """Accept the wire shape {key: {"results": [...]}} as well as lists."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        flattened = {}
        for key, value in v.items():
            if isinstance(value, dict):
                flattened[key] = value.get("results") or []
            else:
                flattened[key] = value
        return flattened

    def get_property(self, key: str) -> str:
        """Property value, or "" when absent or null."""
        value = self.properties.get(key)
        if value is None:
            return ""
        return value

    def has_property(self, key: str) -> bool:
        """True when the key is present, even with a null value."""
        return key in self.properties

    def get_associations(self, relation: str, account_id: str) -> List[AssociationLink]:
        """Links for a relation under the given account namespace."""
        return list(self.associations.get(association_key(account_id, relation), []))


class Owner(BaseModel):
    """CRM object owner (GET /owners/{ownerId})."""

    id: str
    email: str = ""
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    user_id: Optional[int] = Field(None, alias="userId")
    archived: bool = False

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("email", "first_name", "last_name", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
