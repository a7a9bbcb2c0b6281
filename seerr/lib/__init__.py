"""Request pipeline services and small media utilities."""
