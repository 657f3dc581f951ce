"""Authentication and user-management service."""
