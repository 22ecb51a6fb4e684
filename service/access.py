"""
Role checks for administrative operations.
"""


def has_role_access(user_role: str, required_role: str) -> bool:
    """
    Check whether a user role grants access to a required role.

    Roles compare case-insensitively; a super admin passes every check.
    """
    normalized_user_role = (user_role or "").strip().lower()
    normalized_required_role = required_role.strip().lower()

    if normalized_user_role == "super_admin":
        return True

    return normalized_user_role == normalized_required_role
