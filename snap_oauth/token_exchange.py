"""OAuth token exchange"""

import logging
from typing import Optional

import httpx

import settings
from .authorization import token_endpoint
from .errors import TokenExchangeFailed
from .models import TokenData


logger = logging.getLogger(__name__)


async def exchange_code_for_tokens(
    auth_domain: str,
    client_id: str,
    code: str,
    code_verifier: str,
    redirect_uri: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TokenData:
    """Exchange an authorization code for tokens

    The code is single use, so a failure here is never retried.

    Args:
        auth_domain: Identity provider host
        client_id: OAuth client identifier
        code: Authorization code from the callback
        code_verifier: PKCE code verifier of this login attempt
        redirect_uri: Redirect URI sent in the authorization request
        transport: Optional httpx transport (used by tests)

    Returns:
        TokenData with the ID and access tokens

    Raises:
        TokenExchangeFailed: on transport errors, non-2xx responses,
            malformed JSON or missing tokens
    """
    url = token_endpoint(auth_domain)
    data = {
        "grant_type": "authorization_code",
        "client_id": client_id,
        "code_verifier": code_verifier,
        "code": code,
        "redirect_uri": redirect_uri,
    }

    logger.info(f"Exchanging authorization code for tokens at {url}")

    timeout = httpx.Timeout(settings.REQUEST_TIMEOUT, connect=settings.CONNECT_TIMEOUT)
    try:
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            response = await client.post(
                url,
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

            logger.debug(f"Token exchange response status: {response.status_code}")

            if not response.is_success:
                logger.error(f"Token exchange failed with status {response.status_code}: {response.text}")
                raise TokenExchangeFailed(f"token endpoint returned HTTP {response.status_code}")

            payload = response.json()

    except httpx.TimeoutException as e:
        logger.error(f"Token exchange timed out: {e}")
        raise TokenExchangeFailed(f"token exchange timed out: {e}") from e
    except httpx.RequestError as e:
        logger.error(f"Token exchange request failed: {e}")
        raise TokenExchangeFailed(f"HTTP error: {e}") from e
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError (body not UTF-8)
        logger.error(f"Failed to parse token exchange response: {e}")
        raise TokenExchangeFailed(f"JSON error: {e}") from e

    if not isinstance(payload, dict):
        raise TokenExchangeFailed("token endpoint returned an unexpected JSON document")

    id_token = payload.get("id_token")
    access_token = payload.get("access_token")

    if not isinstance(id_token, str) or not isinstance(access_token, str) or not id_token or not access_token:
        logger.error("Token exchange response missing required tokens")
        raise TokenExchangeFailed("token response is missing id_token or access_token")

    logger.info("Successfully exchanged authorization code for tokens")
    return TokenData(
        id_token=id_token,
        access_token=access_token,
        refresh_token=payload.get("refresh_token"),
    )
