import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session

from .config import AUTH_JWT_AUDIENCE, AUTH_JWT_SECRET
from .database import get_db
from .models import Barbershop, Profile, UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ALGORITHM = "HS256"


def verify_access_token(token: str) -> dict:
    """
    Verify an access token issued by the managed auth service.

    Tokens are HS256 JWTs signed with the project's JWT secret and carry the
    user id in ``sub``.
    """
    try:
        payload = jwt.decode(
            token,
            AUTH_JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=AUTH_JWT_AUDIENCE,
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        ) from e
    except JWTError as e:
        logger.warning(f"⚠️ Token verification failed: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token") from e

    if not payload.get("sub"):
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(payload.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Profile:
    """Get current user profile from the auth service token"""

    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    payload = verify_access_token(credentials.credentials)
    user_id = payload["sub"]

    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if profile:
        return profile

    # First request after sign-up: the profile row does not exist yet
    metadata = payload.get("user_metadata") or {}
    logger.info(f"🆕 Creating profile for auth user: {user_id}")
    profile = Profile(
        id=user_id,
        email=payload.get("email"),
        full_name=metadata.get("full_name") or metadata.get("name"),
        phone=payload.get("phone") or metadata.get("phone"),
        role="client",
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def is_super_admin(db: Session, user: Profile) -> bool:
    if user.role == "super_admin":
        return True
    return (
        db.query(UserRole)
        .filter(UserRole.user_id == user.id, UserRole.role == "super_admin")
        .first()
        is not None
    )


def is_barbershop_admin(db: Session, user: Profile, barbershop: Barbershop) -> bool:
    """Owner, admin user role for this barbershop, or super admin"""
    if barbershop.owner_id == user.id:
        return True
    admin_role = (
        db.query(UserRole)
        .filter(
            UserRole.user_id == user.id,
            UserRole.role == "admin",
            UserRole.barbershop_id == barbershop.id,
        )
        .first()
    )
    if admin_role:
        return True
    return is_super_admin(db, user)


async def get_admin_barbershop(
    barbershop_id: str,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Barbershop:
    """
    Resolve the barbershop from the path and ensure the caller administers it.
    Use this dependency for every back-office route.
    """
    barbershop = db.query(Barbershop).filter(Barbershop.id == barbershop_id).first()
    if not barbershop:
        raise HTTPException(status_code=404, detail="Barbershop not found")

    if not is_barbershop_admin(db, current_user, barbershop):
        logger.warning(
            f"⚠️ User {current_user.id} attempted admin access to barbershop {barbershop_id}"
        )
        raise HTTPException(status_code=403, detail="Not an administrator of this barbershop")

    return barbershop
