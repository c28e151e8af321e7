"""
Domain errors raised by the service layer.
Each carries the HTTP status the API reports it with.
"""


class ClinicError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(ClinicError):
    """Input that passed schema validation but is not acceptable (no state change)."""
    status_code = 400


class NotFound(ClinicError):
    status_code = 404

    @classmethod
    def for_entity(cls, entity: str, entity_id: int) -> "NotFound":
        return cls(f"{entity} {entity_id} not found")


class PersistenceError(ClinicError):
    """The store rejected or failed a write; the session has been rolled back."""
    status_code = 503
