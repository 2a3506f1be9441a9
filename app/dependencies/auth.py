import logging
import os
import time
from typing import Optional

import jwt  # PyJWT
import requests
from fastapi import Header, HTTPException, status, Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

# Cache for JWKS (Public Keys)
JWKS_CACHE = None
JWKS_CACHE_TIMESTAMP = None
JWKS_CACHE_TTL = 3600  # Cache for 1 hour
JWKS_STALE_LIMIT = 86400  # Stale cache is still usable for 24 hours if Supabase is down

ASYMMETRIC_ALGORITHMS = ("ES256", "RS256")
TOKEN_AUDIENCE = "authenticated"


def get_jwks(supabase_url: str, force_refresh: bool = False):
    """
    Fetch JWKS from Supabase with caching and retry logic.
    Only caches successful fetches - failures are not cached to allow retries.
    """
    global JWKS_CACHE, JWKS_CACHE_TIMESTAMP

    if JWKS_CACHE and JWKS_CACHE_TIMESTAMP and not force_refresh:
        if time.time() - JWKS_CACHE_TIMESTAMP < JWKS_CACHE_TTL:
            return JWKS_CACHE

    max_retries = 3
    last_error = None
    jwks_url = f"{supabase_url}/auth/v1/.well-known/jwks.json"

    for attempt in range(max_retries):
        try:
            logger.info("[AUTH] Fetching JWKS from %s (attempt %s/%s)", jwks_url, attempt + 1, max_retries)
            r = requests.get(jwks_url, timeout=10)
            r.raise_for_status()
            JWKS_CACHE = r.json()
            JWKS_CACHE_TIMESTAMP = time.time()
            return JWKS_CACHE
        except requests.exceptions.RequestException as e:
            last_error = str(e)
            logger.warning("[AUTH] JWKS fetch failed (attempt %s/%s): %s", attempt + 1, max_retries, last_error)
            if attempt < max_retries - 1:
                time.sleep(1)

    logger.error("[AUTH] Failed to fetch JWKS after %s attempts: %s", max_retries, last_error)

    # Fall back to a stale cache rather than locking everyone out
    if JWKS_CACHE and JWKS_CACHE_TIMESTAMP and time.time() - JWKS_CACHE_TIMESTAMP < JWKS_STALE_LIMIT:
        logger.warning("[AUTH] Using stale JWKS cache as fallback")
        return JWKS_CACHE
    return None


def _extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header"
        )

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid header format. Expected 'Bearer <token>'"
        )

    token = authorization[len("Bearer "):].strip()

    # Reject common invalid token values sent by the frontend before login completes
    if not token or token.lower() in ("null", "undefined", "none"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token"
        )

    if len(token.split(".")) != 3:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format. Token must have header.payload.signature structure."
        )

    return token


def _decode_asymmetric(token: str, algo: str) -> dict:
    supabase_url = os.getenv("SUPABASE_URL")
    if not supabase_url:
        logger.error("[AUTH] SUPABASE_URL is missing for %s verification", algo)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server misconfiguration: SUPABASE_URL not set"
        )

    jwks = get_jwks(supabase_url)
    if not jwks:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service temporarily unavailable. Please try again in a moment."
        )

    kid = jwt.get_unverified_header(token).get("kid")
    try:
        jwk_set = jwt.PyJWKSet.from_dict(jwks)
        signing_key = next(
            (key for key in jwk_set.keys if kid is None or key.key_id == kid),
            None
        )
        if signing_key is None:
            raise jwt.InvalidTokenError(f"No signing key found for kid {kid}")
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=[algo],
            audience=TOKEN_AUDIENCE,
        )
    except jwt.PyJWTError as e:
        logger.warning("[AUTH] %s verification failed: %s", algo, e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token signature"
        )


def _decode_hs256(token: str) -> dict:
    secret = os.getenv("SUPABASE_JWT_SECRET")
    if not secret:
        logger.error("[AUTH] SUPABASE_JWT_SECRET is missing in environment variables")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server misconfiguration: SUPABASE_JWT_SECRET not set"
        )
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience=TOKEN_AUDIENCE,
        )
    except jwt.PyJWTError as e:
        logger.warning("[AUTH] HS256 verification failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token signature"
        )


def verify_supabase_token(authorization: Optional[str] = Header(None)) -> dict:
    """
    Verifies the Supabase JWT token.
    Supports both HS256 (Shared Secret) and ES256/RS256 (Asymmetric Key).
    Returns the payload dict if valid.
    """
    token = _extract_bearer_token(authorization)

    try:
        algo = jwt.get_unverified_header(token).get("alg")
    except jwt.DecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token header: {str(e)}"
        )

    if algo == "HS256":
        return _decode_hs256(token)
    if algo in ASYMMETRIC_ALGORITHMS:
        return _decode_asymmetric(token, algo)

    logger.warning("[AUTH] Unsupported algorithm: %s", algo)
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Unsupported token algorithm: {algo}"
    )


def upsert_user_from_claims(payload: dict, db: Session) -> User:
    """
    Find the user for a verified token, creating the row on first sign-in.
    Profile fields are refreshed from the token; created_at is never touched.
    """
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing user ID claim"
        )

    metadata = payload.get("user_metadata") or {}
    profile = {
        "email": (payload.get("email") or "").lower() or None,
        "first_name": metadata.get("first_name") or metadata.get("given_name"),
        "last_name": metadata.get("last_name") or metadata.get("family_name"),
        "profile_image_url": metadata.get("avatar_url") or metadata.get("picture"),
    }

    user = db.query(User).filter(User.id == user_id).first()
    if user:
        changed = False
        for field, value in profile.items():
            if value and getattr(user, field) != value:
                setattr(user, field, value)
                changed = True
        if changed:
            db.commit()
            db.refresh(user)
        return user

    user = User(id=user_id, is_premium=False, **profile)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the same user between our lookup and insert
        db.rollback()
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Account email is already linked to another user"
            )
        return user

    db.refresh(user)
    logger.info("[AUTH] Created user %s on first sign-in", user_id)
    return user


def get_current_user(
    payload: dict = Depends(verify_supabase_token),
    db: Session = Depends(get_db)
) -> User:
    """
    FastAPI dependency that verifies the Supabase token and returns the User row.
    This is the main dependency to use in route handlers.
    """
    try:
        return upsert_user_from_claims(payload, db)
    except HTTPException:
        raise
    except SQLAlchemyError:
        logger.exception("[AUTH] Database error while resolving user")
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database temporarily unavailable. Please try again in a moment."
        )
