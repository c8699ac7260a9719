"""Travel map backend: password-gated location pins with photo ingestion."""

__version__ = "1.0.0"
