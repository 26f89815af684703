"""Infrastructure layer: persistence, GitHub access, HTTP API."""
