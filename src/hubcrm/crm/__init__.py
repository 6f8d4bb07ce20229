"""CRM module: generic resources, the v3 client and typed projections.

This module provides:
- Resource, AssociationLink, AssociationSpec, Owner models
- CRMClient for object reads (single and batch) and writes
- Company, Contact, Training, Session, User projections
"""

from hubcrm.crm.client import CRMClient, resolve_bearer_token
from hubcrm.crm.models import (
    AssociationLink,
    AssociationSpec,
    Owner,
    Resource,
    association_key,
)
from hubcrm.crm.objects import (
    COMPANY_OBJECT_TYPE_ID,
    CONTACT_OBJECT_TYPE_ID,
    SESSION_OBJECT_TYPE_ID,
    TRAINING_OBJECT_TYPE_ID,
    USER_OBJECT_TYPE_ID,
    Company,
    Contact,
    Session,
    Training,
    User,
)

__all__ = [
    "CRMClient",
    "resolve_bearer_token",
    "Resource",
    "AssociationLink",
    "AssociationSpec",
    "Owner",
    "association_key",
    "Company",
    "Contact",
    "Training",
    "Session",
    "User",
    "COMPANY_OBJECT_TYPE_ID",
    "CONTACT_OBJECT_TYPE_ID",
    "TRAINING_OBJECT_TYPE_ID",
    "SESSION_OBJECT_TYPE_ID",
    "USER_OBJECT_TYPE_ID",
]
