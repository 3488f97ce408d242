"""
Role-based authorization for FastAPI endpoints.
"""

from typing import List, Optional
from fastapi import Depends, HTTPException, status
from clubmanager.auth.jwt_handler import verify_jwt_token

STAFF_ROLES = ["ADMIN", "TRAINER"]


def get_current_user(allowed_roles: Optional[List[str]] = None):
    """
    Dependency factory to create a get_current_user dependency with role checking.

    Args:
        allowed_roles: Roles allowed to access the endpoint.
                       If None, any authenticated caller can access.

    Example:
        @router.put("/settings")
        def update(current_user=Depends(get_current_user(["ADMIN"]))):
            ...
    """
    def dependency(current_user_data=Depends(verify_jwt_token)):
        if not current_user_data:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required"
            )

        if allowed_roles is None:
            return current_user_data

        user_role = current_user_data.get("role")
        if not user_role:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User role not found"
            )

        if user_role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {allowed_roles}, your role: {user_role}"
            )

        return current_user_data

    return dependency


def ensure_self_or_staff(current_user: dict, athlete_id: str) -> None:
    """Athletes may only act on their own records; staff on any."""
    if current_user["role"] in STAFF_ROLES:
        return
    if current_user["id"] != athlete_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Athletes can only access their own data"
        )
