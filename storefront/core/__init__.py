"""Core configuration, security, and token helpers."""
