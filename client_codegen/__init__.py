"""Generate typed API client modules from Swagger / OpenAPI documents."""

__version__ = "0.1.0"
