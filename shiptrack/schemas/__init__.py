"""Request/response bodies for the HTTP layer (camelCase on the wire)."""
