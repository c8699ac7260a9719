"""Service layer for the travel map backend."""
