"""HubSpot CRM client for contact creation."""

from typing import Optional

import httpx
import structlog

from jobhunter.core.models import PushResult

CONTACTS_PATH = "/crm/v3/objects/contacts"
DEFAULT_BASE_URL = "https://api.hubapi.com"

# HubSpot's wording for a 409 on an existing email. Matched as a plain
# substring; a change in HubSpot's error text silently breaks de-duplication.
DUPLICATE_MARKER = "Contact already exists"

log = structlog.get_logger()


def build_payload(properties: dict) -> dict:
    return {"properties": properties}


def is_duplicate_response(body: str) -> bool:
    return DUPLICATE_MARKER in (body or "")


async def create_contact(
    properties: dict,
    token: str,
    base_url: str = DEFAULT_BASE_URL,
    client: Optional[httpx.AsyncClient] = None,
) -> PushResult:
    """Create a HubSpot contact.

    An existing contact counts as success. Transport errors are logged and
    returned as a failed PushResult, never raised.

    Args:
        properties: HubSpot contact properties (email, firstname, ...)
        token: Private app bearer token
        base_url: API root, overridable for testing
        client: Optional shared client; one is created per call otherwise

    Returns:
        PushResult with success/duplicate flags and the HTTP status.
    """
    email = properties.get("email")

    if not token:
        log.warning("hubspot_token_not_set")
        return PushResult(success=False, error="hubspot token not set")

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=60.0) as own_client:
                response = await _post_contact(own_client, properties, token, base_url)
        else:
            response = await _post_contact(client, properties, token, base_url)

    except Exception as e:
        log.error("hubspot_connection_error", error=str(e), email=email)
        return PushResult(success=False, error=str(e))

    if response.is_success:
        log.info("hubspot_contact_created", email=email, status_code=response.status_code)
        return PushResult(success=True, status_code=response.status_code)

    if is_duplicate_response(response.text):
        log.info("hubspot_contact_exists", email=email, status_code=response.status_code)
        return PushResult(success=True, duplicate=True, status_code=response.status_code)

    log.error("hubspot_error", email=email, status_code=response.status_code, body=response.text)
    return PushResult(success=False, status_code=response.status_code, error=response.text)


async def _post_contact(
    client: httpx.AsyncClient,
    properties: dict,
    token: str,
    base_url: str,
) -> httpx.Response:
    return await client.post(
        f"{base_url.rstrip('/')}{CONTACTS_PATH}",
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        },
        json=build_payload(properties),
    )
