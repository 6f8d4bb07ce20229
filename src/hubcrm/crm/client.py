"""CRM v3 resource client.

Reads, creates and updates CRM objects over HTTP and decodes them into
Resource values. Every operation is one request/response round trip:
no retries, no caching.

Auth:
    Each call needs exactly one bearer token: either the access_token the
    caller passes, or the static token from CRMConfig. Both or neither is
    a configuration error raised before any request is sent.

Usage:
    client = CRMClient(CRMConfig(account_id="42"))
    contact = client.find_object(token, CONTACT_OBJECT_TYPE_ID, "101",
                                 properties=["email"])
"""

import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

from pydantic import ValidationError

from hubcrm.config import CRMConfig
from hubcrm.connectors.base import (
    BearerTokenAuth,
    ConfigurationError,
    DecodeError,
    InvalidArgumentError,
    NotAuthenticatedError,
    RemoteError,
    truncate,
)
from hubcrm.connectors.http_client import HTTPClient, HTTPResponse
from hubcrm.crm.models import Owner, Resource
from hubcrm.crm.objects import internal_name_for

logger = logging.getLogger(__name__)

ERROR_PREFIX = "hubspot crm request failed"


def resolve_bearer_token(access_token: Optional[str], static_token: Optional[str]) -> str:
    """Pick the single bearer token for a call.

    Raises:
        ConfigurationError: If both a per-call and a static token are set
        NotAuthenticatedError: If neither is set
    """
    if access_token and static_token:
        raise ConfigurationError("exactly one of static token or access token must be set, got both")
    if not access_token and not static_token:
        raise NotAuthenticatedError("exactly one of static token or access token must be set, got neither")
    return access_token or static_token


class CRMClient:
    """Client for the CRM v3 objects and owners endpoints."""

    def __init__(self, config: CRMConfig, http: Optional[HTTPClient] = None):
        """Initialize the client.

        Args:
            config: Immutable CRM configuration
            http: HTTP client; defaults to one built from config.policy
        """
        self.config = config
        self.http = http or HTTPClient(policy=config.policy)

    @property
    def account_id(self) -> str:
        return self.config.account_id

    def _auth(self, access_token: Optional[str]) -> BearerTokenAuth:
        return BearerTokenAuth(token=resolve_bearer_token(access_token, self.config.static_token))

    def _object_url(self, object_type_id: str, object_id: str = "") -> str:
        url = f"{self.config.objects_url}/{object_type_id}"
        if object_id:
            url += f"/{quote(object_id, safe='')}"
        return url

    def _decode_resource(self, payload: Any, object_type_id: str, response: HTTPResponse) -> Resource:
        if not isinstance(payload, dict) or "id" not in payload:
            raise DecodeError(
                f"response is not a crm object: {{endpoint={response.endpoint}, "
                f"resBody={truncate(response.body)}}}",
                endpoint=response.endpoint,
                body=truncate(response.body),
            )
        data = dict(payload)
        data["object_type_id"] = object_type_id
        data["internal_name"] = internal_name_for(object_type_id)
        try:
            return Resource.model_validate(data)
        except ValidationError as e:
            raise DecodeError(
                f"failed to decode crm object: {{endpoint={response.endpoint}, "
                f"resBody={truncate(response.body)}, err={e}}}",
                endpoint=response.endpoint,
                body=truncate(response.body),
            ) from e

    # =========================================================================
    # Reads
    # =========================================================================

    def find_object(
        self,
        access_token: Optional[str],
        object_type_id: str,
        object_id: str,
        id_property: Optional[str] = None,
        properties: Optional[Sequence[str]] = None,
        associations: Optional[Sequence[str]] = None,
    ) -> Resource:
        """Fetch one object by id.

        Args:
            access_token: Per-call bearer token (None in static auth mode)
            object_type_id: Object type id, e.g. "0-1"
            object_id: Object id, or the value of id_property
            id_property: Alternate unique property to resolve object_id
            properties: Properties to return (server default if None)
            associations: Relations to expand

        Returns:
            Decoded Resource
        """
        auth = self._auth(access_token)

        params: Dict[str, str] = {}
        if id_property:
            params["idProperty"] = id_property
        if associations is not None:
            params["associations"] = ",".join(associations)
        if properties is not None:
            params["properties"] = ",".join(properties)

        response = self.http.get(
            self._object_url(object_type_id, object_id),
            params=params or None,
            auth=auth,
            expected_status=200,
            error_prefix=ERROR_PREFIX,
        )
        return self._decode_resource(response.json(), object_type_id, response)

    def find_batch(
        self,
        access_token: Optional[str],
        object_type_id: str,
        ids: Sequence[str],
        properties: Optional[Sequence[str]] = None,
    ) -> List[Resource]:
        """Fetch several objects of one type in a single request.

        Results come back in server order. Use find_batch_by_id to
        correlate results with requested ids.

        Raises:
            InvalidArgumentError: If ids is empty (no request is sent)
            RemoteError: On a non-200 status, or when the server returned a
                different number of objects than requested
        """
        if not ids:
            raise InvalidArgumentError("objects must not be empty")

        auth = self._auth(access_token)
        body = {
            "properties": list(properties) if properties is not None else [],
            "inputs": [{"id": object_id} for object_id in ids],
        }
        response = self.http.post(
            f"{self._object_url(object_type_id)}/batch/read",
            json=body,
            auth=auth,
            expected_status=200,
            error_prefix=ERROR_PREFIX,
        )

        payload = response.json()
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise DecodeError(
                f"failed to decode batch response body: {{endpoint={response.endpoint}, "
                f"resCode={response.status_code}, resBody={truncate(response.body)}}}",
                endpoint=response.endpoint,
                body=truncate(response.body),
            )

        # The server silently drops objects that are missing or not visible
        if len(results) != len(ids):
            logger.warning(
                f"batch read on {object_type_id} returned {len(results)} of {len(ids)} objects"
            )
            raise RemoteError(
                f"expected {len(ids)} crm objects but got {len(results)}: "
                f"{{endpoint={response.endpoint}, resCode={response.status_code}, "
                f"resBody={truncate(response.body)}}}",
                status_code=404,
                body=truncate(response.body),
                endpoint=response.endpoint,
            )

        return [self._decode_resource(item, object_type_id, response) for item in results]

    def find_batch_by_id(
        self,
        access_token: Optional[str],
        object_type_id: str,
        ids: Sequence[str],
        properties: Optional[Sequence[str]] = None,
    ) -> Dict[str, Resource]:
        """Batch read returning results keyed by object id.

        Raises:
            RemoteError: If the server returned an id that was not requested,
                or repeated an id so that a requested one has no result
        """
        resources = self.find_batch(access_token, object_type_id, ids, properties)
        requested = set(ids)
        by_id: Dict[str, Resource] = {}
        for resource in resources:
            if resource.id not in requested:
                raise RemoteError(
                    f"batch read returned unrequested object id {resource.id!r}",
                    status_code=404,
                    endpoint=self._object_url(object_type_id),
                )
            by_id[resource.id] = resource
        missing = requested - set(by_id)
        if missing:
            raise RemoteError(
                f"batch read is missing object ids {sorted(missing)}",
                status_code=404,
                endpoint=self._object_url(object_type_id),
            )
        return by_id

    def find_object_owner(self, access_token: Optional[str], owner_id: str) -> Owner:
        """Fetch an object owner by id."""
        auth = self._auth(access_token)
        response = self.http.get(
            f"{self.config.owners_url}/{quote(owner_id, safe='')}",
            auth=auth,
            expected_status=200,
            error_prefix=ERROR_PREFIX,
        )
        payload = response.json()
        try:
            return Owner.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(
                f"failed to decode object owner response body: {{endpoint={response.endpoint}, "
                f"resCode={response.status_code}, resBody={truncate(response.body)}, err={e}}}",
                endpoint=response.endpoint,
                body=truncate(response.body),
            ) from e

    # =========================================================================
    # Writes
    # =========================================================================

    def create_object(
        self,
        access_token: Optional[str],
        object_type_id: str,
        properties: Dict[str, Any],
        associations: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """Create an object. Succeeds only on 201 Created.

        Args:
            associations: Association inputs, see AssociationSpec.to()
        """
        auth = self._auth(access_token)
        self.http.post(
            self._object_url(object_type_id),
            json={"properties": properties, "associations": associations or []},
            auth=auth,
            expected_status=201,
            error_prefix=ERROR_PREFIX,
        )
        logger.info(f"Created {object_type_id} object")

    def update_object(
        self,
        access_token: Optional[str],
        object_type_id: str,
        object_id: str,
        properties: Dict[str, Any],
        id_property: Optional[str] = None,
    ) -> None:
        """Update object properties. Succeeds only on 200 OK.

        Associations cannot be changed here; the body only holds properties.
        """
        auth = self._auth(access_token)
        params = {"idProperty": id_property} if id_property else None
        self.http.patch(
            self._object_url(object_type_id, object_id),
            params=params,
            json={"properties": properties},
            auth=auth,
            expected_status=200,
            error_prefix=ERROR_PREFIX,
        )
        logger.info(f"Updated {object_type_id} object {object_id}")

    def update_resource(self, access_token: Optional[str], resource: Resource) -> None:
        """Write a resource's properties back. Its associations are never sent."""
        if not resource.id:
            raise InvalidArgumentError("resource has no id; create it first")
        self.update_object(
            access_token,
            resource.object_type_id,
            resource.id,
            dict(resource.properties),
        )
