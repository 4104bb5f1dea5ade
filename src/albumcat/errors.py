"""Service-level error types.

Routers translate these into HTTP responses; the CLI into click exceptions.
Storage failures are not wrapped here and propagate as ``SQLAlchemyError``.
"""


class AlbumcatError(Exception):
    """Base class for errors raised by the service layer."""


class NotFoundError(AlbumcatError):
    """Raised when an operation presupposes a record that does not exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class FieldValidationError(AlbumcatError):
    """Raised when input violates a rule that request models cannot express."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
