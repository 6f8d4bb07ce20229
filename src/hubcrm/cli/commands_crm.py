"""CRM object CLI commands.

Commands:
- crm get: Fetch one object
- crm batch: Fetch several objects of one type
- crm owner: Fetch an object owner
- crm create: Create an object
- crm update: Update object properties
"""

from __future__ import annotations

from typing import Dict, List, Optional

import typer
from typer import Context, Typer

from hubcrm.cli.app import app, build_crm_client, echo_json, fail, get_state
from hubcrm.connectors.base import HubCRMError
from hubcrm.crm.models import AssociationSpec

crm_app = Typer(help="Read and write CRM objects")
app.add_typer(crm_app, name="crm")


def _parse_assignments(assignments: List[str]) -> Dict[str, str]:
    """Parse key=value pairs given with --set."""
    properties: Dict[str, str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--set")
        properties[key] = value
    return properties


def _parse_association(raw: str) -> dict:
    """Parse TO_ID:CATEGORY:TYPE_ID into an association input."""
    parts = raw.split(":")
    if len(parts) != 3 or not parts[2].isdigit():
        raise typer.BadParameter(
            f"expected TO_ID:CATEGORY:TYPE_ID, got {raw!r}", param_hint="--associate"
        )
    to_id, category, type_id = parts
    return AssociationSpec(category=category, type_id=int(type_id)).to(to_id)


@crm_app.command(name="get")
def crm_get(
    ctx: Context,
    object_type_id: str = typer.Argument(..., help="Object type id, e.g. 0-1"),
    object_id: str = typer.Argument(..., help="Object id (or value of --id-property)"),
    id_property: Optional[str] = typer.Option(None, "--id-property", help="Alternate unique property"),
    properties: Optional[List[str]] = typer.Option(None, "--property", "-p", help="Property to return"),
    associations: Optional[List[str]] = typer.Option(
        None, "--association", "-a", help="Relation to expand"
    ),
):
    """Fetch one CRM object.

    Examples:
        hubcrm crm get 0-1 101 -p email -p firstname
        hubcrm crm get 0-1 jane@example.com --id-property email
    """
    state = get_state(ctx)
    try:
        resource = build_crm_client(ctx).find_object(
            state.token,
            object_type_id,
            object_id,
            id_property=id_property,
            properties=properties or None,
            associations=associations or None,
        )
    except HubCRMError as e:
        fail(e)
    echo_json(resource)


@crm_app.command(name="batch")
def crm_batch(
    ctx: Context,
    object_type_id: str = typer.Argument(..., help="Object type id"),
    ids: List[str] = typer.Argument(..., help="Object ids"),
    properties: Optional[List[str]] = typer.Option(None, "--property", "-p", help="Property to return"),
):
    """Fetch several objects of one type in a single request.

    Fails if any requested object is missing.
    """
    state = get_state(ctx)
    try:
        by_id = build_crm_client(ctx).find_batch_by_id(
            state.token, object_type_id, ids, properties=properties or None
        )
    except HubCRMError as e:
        fail(e)
    echo_json(by_id)


@crm_app.command(name="owner")
def crm_owner(
    ctx: Context,
    owner_id: str = typer.Argument(..., help="Owner id"),
):
    """Fetch an object owner."""
    state = get_state(ctx)
    try:
        owner = build_crm_client(ctx).find_object_owner(state.token, owner_id)
    except HubCRMError as e:
        fail(e)
    echo_json(owner)


@crm_app.command(name="create")
def crm_create(
    ctx: Context,
    object_type_id: str = typer.Argument(..., help="Object type id"),
    assignments: List[str] = typer.Option(..., "--set", "-s", help="Property as key=value"),
    associate: Optional[List[str]] = typer.Option(
        None, "--associate", help="Association as TO_ID:CATEGORY:TYPE_ID"
    ),
):
    """Create a CRM object.

    Examples:
        hubcrm crm create 2-141027484 -s hour=9h --associate 77:USER_DEFINED:291
    """
    state = get_state(ctx)
    properties = _parse_assignments(assignments)
    associations = [_parse_association(raw) for raw in associate or []]
    try:
        build_crm_client(ctx).create_object(state.token, object_type_id, properties, associations)
    except HubCRMError as e:
        fail(e)
    typer.echo(f"✅ Created {object_type_id} object")


@crm_app.command(name="update")
def crm_update(
    ctx: Context,
    object_type_id: str = typer.Argument(..., help="Object type id"),
    object_id: str = typer.Argument(..., help="Object id (or value of --id-property)"),
    assignments: List[str] = typer.Option(..., "--set", "-s", help="Property as key=value"),
    id_property: Optional[str] = typer.Option(None, "--id-property", help="Alternate unique property"),
):
    """Update properties of a CRM object."""
    state = get_state(ctx)
    properties = _parse_assignments(assignments)
    try:
        build_crm_client(ctx).update_object(
            state.token, object_type_id, object_id, properties, id_property=id_property
        )
    except HubCRMError as e:
        fail(e)
    typer.echo(f"✅ Updated {object_type_id} object {object_id}")
