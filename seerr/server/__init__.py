"""FastAPI server for Seerr."""
