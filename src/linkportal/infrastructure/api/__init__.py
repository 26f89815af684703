"""FastAPI surface of LinkPortal."""
