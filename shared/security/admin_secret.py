import secrets


def verify_admin_secret(provided: str | None, expected: str) -> bool:
    """Verify the admin secret using constant-time comparison to prevent timing attacks."""
    if not provided or not expected:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())
