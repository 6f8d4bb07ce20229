"""Typed projections over generic CRM resources.

Each projection wraps a Resource (composition, no subclassing) together
with the account id that namespaces association keys, and exposes named
getters for the properties that object type carries.
"""

from dataclasses import dataclass
from typing import Dict, List

from hubcrm.crm.models import AssociationLink, AssociationSpec, Resource

# =============================================================================
# Object Types
# =============================================================================

COMPANY_INTERNAL_NAME = "companies"
COMPANY_OBJECT_TYPE_ID = "0-2"

CONTACT_INTERNAL_NAME = "contacts"
CONTACT_OBJECT_TYPE_ID = "0-1"

TRAINING_INTERNAL_NAME = "trainings"
TRAINING_OBJECT_TYPE_ID = "2-141027445"

SESSION_INTERNAL_NAME = "sessions"
SESSION_OBJECT_TYPE_ID = "2-141027484"

USER_INTERNAL_NAME = "users"
USER_OBJECT_TYPE_ID = "0-115"

INTERNAL_NAMES: Dict[str, str] = {
    COMPANY_OBJECT_TYPE_ID: COMPANY_INTERNAL_NAME,
    CONTACT_OBJECT_TYPE_ID: CONTACT_INTERNAL_NAME,
    TRAINING_OBJECT_TYPE_ID: TRAINING_INTERNAL_NAME,
    SESSION_OBJECT_TYPE_ID: SESSION_INTERNAL_NAME,
    USER_OBJECT_TYPE_ID: USER_INTERNAL_NAME,
}


def internal_name_for(object_type_id: str) -> str:
    """Collection name for a known object type id, else ""."""
    return INTERNAL_NAMES.get(object_type_id, "")


# =============================================================================
# Association Types
# =============================================================================

TRAINING_TO_SESSION = AssociationSpec(category="USER_DEFINED", type_id=290)
TRAINING_TO_CONTACT = AssociationSpec(category="USER_DEFINED", type_id=288)
SESSION_TO_TRAINING = AssociationSpec(category="USER_DEFINED", type_id=291)

# =============================================================================
# Property Names
# =============================================================================

COMPANY_PROPERTY_NAME = "name"

CONTACT_PROPERTY_EMAIL = "email"
CONTACT_PROPERTY_FIRST_NAME = "firstname"
CONTACT_PROPERTY_LAST_NAME = "lastname"
CONTACT_PROPERTY_PHONE = "phone"
CONTACT_PROPERTY_ADDRESS = "address"
CONTACT_PROPERTY_CITY = "city"
CONTACT_PROPERTY_ZIP = "zip"
CONTACT_PROPERTY_CATEGORY = "categorie"
CONTACT_PROPERTY_WEDA_ID = "user_id_new"
CONTACT_PROPERTY_SPECIALITY = "specialite"

TRAINING_PROPERTY_NAME = "training_name"
TRAINING_PROPERTY_TRAINER = "trainer"
TRAINING_PROPERTY_TIME_SPENT = "time_spent"
TRAINING_PROPERTY_PIPELINE_STAGE = "hs_pipeline_stage"

SESSION_PROPERTY_NAME = "hour"
SESSION_PROPERTY_COMMENT = "comment"
SESSION_PROPERTY_TRAINER = "trainer"
SESSION_PROPERTY_START_TIME = "start_time"
SESSION_PROPERTY_END_TIME = "end_time"
SESSION_PROPERTY_VALIDATED = "validated"
SESSION_PROPERTY_TRAINING_STAGE = "training_stage"

USER_PROPERTY_INTERNAL_USER_ID = "hs_internal_user_id"
USER_PROPERTY_OWNER_ID = "hubspot_owner_id"

# Pipeline stage ids of the trainings pipeline and their display labels
TRAINING_PIPELINE_STAGES: Dict[str, str] = {
    "2767825099": "Contrat Weda OK",
    "2031944925": "Contrat Toutoléron ok",
    "2031944926": "Compte actif",
    "2031944932": "Formation programmée",
    "2031944933": "En cours / programmation à faire",
    "2031944934": "En cours / programmée",
    "2031944935": "À facturer",
    "3129890016": "Facturée",
}
PIPELINE_STAGE_UNSET = "Non renseigné"
PIPELINE_STAGE_UNKNOWN = "Inconnu"


# =============================================================================
# Projections
# =============================================================================


@dataclass(frozen=True)
class _Projection:
    resource: Resource
    account_id: str = ""

    @property
    def id(self) -> str:
        return self.resource.id

    def _prop(self, key: str) -> str:
        return self.resource.get_property(key)

    def _links(self, relation: str) -> List[AssociationLink]:
        return self.resource.get_associations(relation, self.account_id)


class Company(_Projection):
    """Company (object type 0-2)."""

    @property
    def name(self) -> str:
        return self._prop(COMPANY_PROPERTY_NAME)

    @property
    def training_associations(self) -> List[AssociationLink]:
        return self._links(TRAINING_INTERNAL_NAME)


class Contact(_Projection):
    """Contact (object type 0-1)."""

    @property
    def email(self) -> str:
        return self._prop(CONTACT_PROPERTY_EMAIL)

    @property
    def first_name(self) -> str:
        return self._prop(CONTACT_PROPERTY_FIRST_NAME)

    @property
    def last_name(self) -> str:
        return self._prop(CONTACT_PROPERTY_LAST_NAME)

    @property
    def phone(self) -> str:
        return self._prop(CONTACT_PROPERTY_PHONE)

    @property
    def address(self) -> str:
        return self._prop(CONTACT_PROPERTY_ADDRESS)

    @property
    def city(self) -> str:
        return self._prop(CONTACT_PROPERTY_CITY)

    @property
    def zip(self) -> str:
        return self._prop(CONTACT_PROPERTY_ZIP)

    @property
    def category(self) -> str:
        return self._prop(CONTACT_PROPERTY_CATEGORY)

    @property
    def weda_id(self) -> str:
        return self._prop(CONTACT_PROPERTY_WEDA_ID)

    @property
    def speciality(self) -> str:
        return self._prop(CONTACT_PROPERTY_SPECIALITY)

    @property
    def training_associations(self) -> List[AssociationLink]:
        return self._links(TRAINING_INTERNAL_NAME)


class Training(_Projection):
    """Training custom object."""

    @property
    def name(self) -> str:
        return self._prop(TRAINING_PROPERTY_NAME)

    @property
    def trainer(self) -> str:
        return self._prop(TRAINING_PROPERTY_TRAINER)

    @property
    def pipeline_stage(self) -> str:
        """Display label of the pipeline stage."""
        raw = self._prop(TRAINING_PROPERTY_PIPELINE_STAGE)
        if raw == "":
            return PIPELINE_STAGE_UNSET
        return TRAINING_PIPELINE_STAGES.get(raw, PIPELINE_STAGE_UNKNOWN)

    @property
    def session_associations(self) -> List[AssociationLink]:
        return self._links(SESSION_INTERNAL_NAME)


class Session(_Projection):
    """Training session custom object."""

    @property
    def name(self) -> str:
        return self._prop(SESSION_PROPERTY_NAME)

    @property
    def start_time(self) -> str:
        return self._prop(SESSION_PROPERTY_START_TIME)

    @property
    def end_time(self) -> str:
        return self._prop(SESSION_PROPERTY_END_TIME)


class User(_Projection):
    """CRM user (object type 0-115)."""

    @property
    def owner_id(self) -> str:
        return self._prop(USER_PROPERTY_OWNER_ID)
