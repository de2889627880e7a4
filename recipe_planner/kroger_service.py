"""Kroger API client for store lookup and product pricing.

Handles OAuth2 authentication (client credentials for search, authorization
code for a user's own credential), nearest-store lookup, and product price
search. User tokens are persisted per user so they survive restarts.

Every price lookup is a single best-effort attempt: failures degrade to
"not found" instead of failing the whole request.
"""

import logging
import time
from dataclasses import dataclass, field
from urllib.parse import urlencode

import requests
from sqlalchemy.orm import Session

from .config import get_settings
from .models import KrogerToken
from .user_documents import find_user_document, get_or_create_user_document

logger = logging.getLogger(__name__)

# Kroger API base URLs
KROGER_API_BASE = "https://api.kroger.com/v1"
KROGER_AUTH_BASE = "https://api.kroger.com/v1/connect/oauth2"

KROGER_SCOPE = "product.compact"
REQUEST_TIMEOUT = 10

# Service credential cache (not user state)
_client_token: str | None = None
_client_token_expiry: float = 0


@dataclass
class KrogerPrice:
    """A cart item matched to a priced Kroger product."""

    name: str
    product_id: str
    price: float

    def to_dict(self) -> dict:
        return {"name": self.name, "productId": self.product_id, "price": self.price}


@dataclass
class PriceReport:
    """Result of pricing a list of item names at one store."""

    matched: list[KrogerPrice] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return sum(item.price for item in self.matched)

    def to_dict(self) -> dict:
        return {
            "total_cost": f"{self.total_cost:.2f}",
            "matched": [item.to_dict() for item in self.matched],
            "not_found": list(self.not_found),
        }


# =============================================================================
# Configuration
# =============================================================================


def is_configured() -> bool:
    """Check if Kroger API credentials are configured."""
    return get_settings().kroger_configured


def _expiry_from(token_data: dict) -> float:
    # Refresh a minute early
    return time.time() + token_data.get("expires_in", 1800) - 60


def _token_request(data: dict) -> dict:
    """POST to the Kroger token endpoint with client credentials."""
    settings = get_settings()
    response = requests.post(
        f"{KROGER_AUTH_BASE}/token",
        data=data,
        auth=(settings.kroger_client_id, settings.kroger_client_secret),
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=REQUEST_TIMEOUT,
    )
    response.raise_for_status()
    return response.json()


# =============================================================================
# Token Management
# =============================================================================


def get_client_credentials_token() -> str:
    """Get a client credentials token for product search (no user auth needed)."""
    global _client_token, _client_token_expiry

    if _client_token and time.time() < _client_token_expiry:
        return _client_token

    token_data = _token_request({"grant_type": "client_credentials", "scope": KROGER_SCOPE})
    _client_token = token_data["access_token"]
    _client_token_expiry = _expiry_from(token_data)

    logger.info("Obtained Kroger client credentials token")
    return _client_token


def refresh_user_token(refresh_token: str) -> dict:
    """Exchange a refresh token for a new access token."""
    token_data = _token_request({"grant_type": "refresh_token", "refresh_token": refresh_token})
    logger.info("Refreshed Kroger user token")
    return token_data


def save_user_token(db: Session, user_id: int, token_data: dict) -> KrogerToken:
    """Persist a token response for a user, replacing any previous one."""
    token_row = get_or_create_user_document(db, KrogerToken, user_id)
    token_row.access_token = token_data["access_token"]
    token_row.refresh_token = token_data.get("refresh_token", token_row.refresh_token)
    token_row.token_expiry = _expiry_from(token_data)
    db.flush()
    logger.info(f"Saved Kroger token for user {user_id}")
    return token_row


def get_user_token(db: Session, user_id: int) -> str | None:
    """Get the user's Kroger access token, refreshing it if expired.

    Returns:
        The access token, or None if the user never connected Kroger or the
        refresh failed.
    """
    token_row = find_user_document(db, KrogerToken, user_id)
    if token_row is None or not token_row.access_token:
        return None

    if not token_row.is_expired():
        return token_row.access_token

    if not token_row.refresh_token:
        return None

    try:
        token_data = refresh_user_token(token_row.refresh_token)
    except requests.RequestException as e:
        logger.error(f"Failed to refresh Kroger user token: {e}")
        return None

    save_user_token(db, user_id, token_data)
    return token_data["access_token"]


# =============================================================================
# OAuth Flow Helpers
# =============================================================================


def get_auth_url(state: str) -> str:
    """Generate the Kroger OAuth authorization URL."""
    settings = get_settings()

    params = {
        "scope": KROGER_SCOPE,
        "response_type": "code",
        "client_id": settings.kroger_client_id,
        "redirect_uri": settings.kroger_redirect_uri,
        "state": state,
    }

    return f"{KROGER_AUTH_BASE}/authorize?{urlencode(params)}"


def exchange_auth_code(code: str) -> dict:
    """Exchange an authorization code for access and refresh tokens.

    Raises:
        requests.RequestException: If the exchange fails.
    """
    settings = get_settings()
    token_data = _token_request(
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": settings.kroger_redirect_uri,
        }
    )
    logger.info("Exchanged Kroger auth code for user tokens")
    return token_data


# =============================================================================
# Store & Product Search
# =============================================================================


def _search(path: str, params: dict, token: str) -> list:
    """GET a Kroger search endpoint and return its ``data`` list.

    Raises:
        requests.RequestException: On a network or HTTP error.
        ValueError: If the reply is not a JSON object with a ``data`` list.
    """
    response = requests.get(
        f"{KROGER_API_BASE}{path}",
        params=params,
        headers={"Authorization": f"Bearer {token}"},
        timeout=REQUEST_TIMEOUT,
    )
    response.raise_for_status()
    body = response.json()
    if not isinstance(body, dict):
        raise ValueError(f"Expected a JSON object from {path}, got {type(body).__name__}")
    data = body.get("data") or []
    if not isinstance(data, list):
        raise ValueError(f"Expected a data list from {path}")
    return [record for record in data if isinstance(record, dict)]


def find_nearest_store(zipcode: str, token: str) -> str | None:
    """Return the location id of the closest Kroger store, or None."""
    settings = get_settings()
    try:
        stores = _search(
            "/locations",
            {
                "filter.zipCode.near": zipcode,
                "filter.radiusInMiles": settings.kroger_search_radius,
                "filter.chain": "Kroger",
            },
            token,
        )
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Kroger location lookup failed for {zipcode}: {e}")
        return None

    if not stores:
        return None
    return stores[0].get("locationId")


def lookup_price(term: str, location_id: str, token: str) -> KrogerPrice | None:
    """Find the first product for a search term and its regular price.

    Returns:
        The match, or None if the request fails, the reply is malformed,
        nothing is found, or the product has no positive price.
    """
    try:
        products = _search(
            "/products",
            {
                "filter.term": term,
                "filter.locationId": location_id,
                "filter.limit": 1,
            },
            token,
        )
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Failed to fetch Kroger price for '{term}': {e}")
        return None

    if not products:
        return None

    product = products[0]
    product_id = product.get("productId")
    items = product.get("items") or []
    first_item = items[0] if isinstance(items, list) and items else {}
    price_info = first_item.get("price") if isinstance(first_item, dict) else None
    price = price_info.get("regular") if isinstance(price_info, dict) else None

    if not product_id or isinstance(price, bool) or not isinstance(price, (int, float)) or price <= 0:
        return None
    return KrogerPrice(name=term, product_id=product_id, price=float(price))


def price_items(names: list[str], location_id: str, token: str) -> PriceReport:
    """Price each item name at a store, one request at a time."""
    report = PriceReport()
    for name in names:
        match = lookup_price(name, location_id, token)
        if match is None:
            report.not_found.append(name)
        else:
            report.matched.append(match)

    logger.info(
        f"Priced {len(report.matched)}/{len(names)} items at store {location_id}, "
        f"total {report.total_cost:.2f}"
    )
    return report
