"""Password hashing, token handling and access control."""
