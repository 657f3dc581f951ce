"""Core: errors, logging, security."""
