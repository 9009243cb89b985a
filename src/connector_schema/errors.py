class ConfigError(ValueError):
    """Configuration is missing or invalid."""


class AuthError(RuntimeError):
    """Authentication or token exchange failed."""


class IdentifierError(ValueError):
    """Schema or table name is missing or blank."""


class CatalogUnavailable(ConnectionError):
    """Catalog connection is absent, closed, or could not be opened."""


class TableNotFound(LookupError):
    """Catalog returned no columns for the requested table."""


class InvalidSchema(ValueError):
    """Schema is structurally inconsistent."""


class QueryError(RuntimeError):
    """Metadata query failed in the driver."""
