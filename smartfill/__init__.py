"""SmartFill: per-field autofill suggestions and password strength scoring."""

__version__ = "0.1.0"
