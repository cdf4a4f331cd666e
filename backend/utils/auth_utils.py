import json
import time
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any
import urllib.request

from fastapi import Depends, Header, HTTPException, status, Request
from jose import jwt
from jose.exceptions import JWTError, ExpiredSignatureError, JWTClaimsError

# === Cognito Configuration ===
# You can find these in your AWS Cognito User Pool settings.
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

COGNITO_REGION = os.getenv("COGNITO_REGION", "ap-south-1")
COGNITO_USER_POOL_ID = os.getenv("COGNITO_USER_POOL_ID")
COGNITO_APP_CLIENT_ID = os.getenv("COGNITO_APP_CLIENT_ID")

COGNITO_ISSUER = f"https://cognito-idp.{COGNITO_REGION}.amazonaws.com/{COGNITO_USER_POOL_ID}"
COGNITO_JWKS_URL = f"{COGNITO_ISSUER}/.well-known/jwks.json"

JWKS_CACHE_SECONDS = 60 * 60 * 24
PREMIUM_GROUP = "premium"
ADMIN_GROUP = "admin"
# Groups whose members are never held to the free-plan batch limit
UNLIMITED_BATCH_GROUPS = ("dealer",)

# Cache for Cognito's public keys (JWKS)
jwks_cache = {
    "keys": [],
    "expiration_time": 0,
}


def get_jwks():
    """
    Retrieves the JSON Web Key Set (JWKS) from Cognito.
    Keys are cached for a day.
    """
    if jwks_cache["keys"] and jwks_cache["expiration_time"] > time.time():
        return jwks_cache["keys"]

    logger.info("Fetching JWKS from: %s", COGNITO_JWKS_URL)
    try:
        with urllib.request.urlopen(COGNITO_JWKS_URL) as response:
            jwks_data = json.loads(response.read().decode("utf-8"))
    except Exception as e:
        logger.exception("Error fetching JWKS: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not fetch Cognito public keys for token validation."
        )

    jwks_cache["keys"] = jwks_data["keys"]
    jwks_cache["expiration_time"] = time.time() + JWKS_CACHE_SECONDS
    return jwks_cache["keys"]


def get_current_user(request: Request) -> Dict[str, Any]:
    """
    FastAPI dependency to validate the Cognito JWT from the Authorization header.

    Usage:
        @router.get("/secure-data", dependencies=[Depends(get_current_user)])
        def secure_endpoint():
            return {"message": "This is secure data."}
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header is missing",
        )

    # The token is expected to be in the format "Bearer <token>"
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    token = parts[1]

    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token header"
        )

    rsa_key = {}
    for key in get_jwks():
        if key["kid"] == unverified_header.get("kid"):
            rsa_key = {
                "kty": key["kty"],
                "kid": key["kid"],
                "use": key["use"],
                "n": key["n"],
                "e": key["e"],
            }
            break

    if not rsa_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unable to find a matching public key to verify the token",
        )

    try:
        return jwt.decode(
            token,
            rsa_key,
            algorithms=["RS256"],
            audience=COGNITO_APP_CLIENT_ID,
            issuer=COGNITO_ISSUER,
        )
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired"
        )
    except JWTClaimsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token claims: {e}"
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Token validation failed: {e}"
        )


def get_user_identifier(user: Dict[str, Any]) -> str:
    """The farmer identity used to own batches and ledger rows."""
    identifier = user.get("sub") or user.get("username") or user.get("cognito:username")
    if not identifier:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has no subject")
    return identifier


def get_user_groups(user: Dict[str, Any]) -> List[str]:
    return list(user.get("cognito:groups") or [])


def get_tenant_id(x_tenant_id: str = Header(...)) -> str:
    if not x_tenant_id or not x_tenant_id.strip():
        raise HTTPException(status_code=400, detail="X-Tenant-ID header is missing")
    return x_tenant_id.strip()


@dataclass
class RequestContext:
    """Who is calling and for which tenant. Passed explicitly to handlers."""
    tenant_id: str
    user_id: str
    groups: List[str] = field(default_factory=list)
    is_premium: bool = False

    @property
    def has_unlimited_batches(self) -> bool:
        return self.is_premium or any(group in UNLIMITED_BATCH_GROUPS for group in self.groups)


def get_request_context(
    user: Dict[str, Any] = Depends(get_current_user),
    tenant_id: str = Depends(get_tenant_id),
) -> RequestContext:
    groups = get_user_groups(user)
    # Admins get premium features
    is_premium = (
        str(user.get("custom:is_premium", "")).lower() == "true"
        or PREMIUM_GROUP in groups
        or ADMIN_GROUP in groups
    )
    return RequestContext(
        tenant_id=tenant_id,
        user_id=get_user_identifier(user),
        groups=groups,
        is_premium=is_premium,
    )


def require_group(allowed_groups: List[str]):
    def checker(context: RequestContext = Depends(get_request_context)) -> RequestContext:
        if not set(context.groups) & set(allowed_groups):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
        return context
    return checker
