"""Service layer: authentication, payload validation and file orchestration."""
