"""Outbound JSON requests."""

from typing import Any

import httpx

from toolbox.core.errors import TransportError
from toolbox.core.logger import LogIcon, logger
from toolbox.core.settings import settings as st
from toolbox.tools.json_io import JSON_CONTENT_TYPE, dumps


def push_json(url: str, data: Any, client: httpx.Client | None = None) -> tuple[httpx.Response, int]:
    """
    POST ``data`` as JSON to ``url``.

    A caller-supplied client is used as is and left open; otherwise a client is
    created for this call and closed afterwards. The response body is read
    before returning. No retries.

    Raises:
        SerializationError: ``data`` cannot be encoded.
        TransportError: The request could not be sent or answered.
    """
    payload = dumps(data)
    headers = {"content-type": JSON_CONTENT_TYPE}

    try:
        if client is not None:
            response = client.post(url, content=payload, headers=headers)
        else:
            with httpx.Client(timeout=st.PUSH_TIMEOUT) as default_client:
                response = default_client.post(url, content=payload, headers=headers)
    except httpx.HTTPError as err:
        raise TransportError(f"error pushing JSON to {url}: {err}") from err

    logger.info("JSON pushed", icon=LogIcon.NETWORK, url=url, status=response.status_code)
    return response, response.status_code
