"""
Security utilities for authentication and authorization
Handles JWT tokens and role checks
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db

# HTTP Bearer scheme
security = HTTPBearer()


class SecurityUtils:
    """Security utility functions"""

    @staticmethod
    def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """
        Create JWT access token

        Args:
            data: Data to encode in token
            expires_delta: Token expiration time

        Returns:
            Encoded JWT token
        """
        to_encode = data.copy()
        if "sub" in to_encode:
            to_encode["sub"] = str(to_encode["sub"])

        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(
                minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
            )

        to_encode.update({"exp": expire, "type": "access"})

        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Dict[str, Any]:
        """
        Decode JWT token

        Raises:
            HTTPException: If token is invalid or expired
        """
        try:
            return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )


class TokenData:
    """Identity carried by an access token"""

    def __init__(self, user_id: Optional[int], role: Optional[str] = None):
        self.user_id = user_id
        self.role = role


def get_current_user_token(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> TokenData:
    """
    Get the caller's identity from the bearer token

    The identity may be absent from an otherwise valid token; routes that
    need it reject that case themselves.

    Raises:
        HTTPException: If the token is invalid
    """
    payload = SecurityUtils.decode_token(credentials.credentials)

    raw_id = payload.get("sub") or payload.get("userId")
    user_id = None
    if raw_id is not None:
        try:
            user_id = int(raw_id)
        except (TypeError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )

    return TokenData(user_id=user_id, role=payload.get("role"))


def get_current_student(
    token_data: TokenData = Depends(get_current_user_token), db: Session = Depends(get_db)
):
    """
    Get the student row behind the token

    Raises:
        HTTPException: If the token carries no identity or the student is unknown
    """
    from app.models.student import Student

    if token_data.user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    student = db.get(Student, token_data.user_id)
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return student


def require_super_admin(current_student=Depends(get_current_student)):
    """Dependency to require super admin role"""
    from app.models.student import StudentRole

    if current_student.role != StudentRole.SUPER_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Super admin access required"
        )
    return current_student
