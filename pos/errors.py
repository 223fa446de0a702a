"""Error kinds raised by the order workflow and its repositories."""

from typing import Optional


class ServiceError(Exception):
    """Base class for every error the service layer surfaces to callers."""

    kind = "service_error"
    status_code = 500

    def __init__(self, message: str, **details) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload = {"error": self.message, "type": self.kind}
        if self.details:
            payload["details"] = self.details
        return payload


class NotFound(ServiceError):
    kind = "not_found"
    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[str] = None) -> None:
        super().__init__(f"{entity} not found", entity=entity, id=entity_id)
        self.entity = entity
        self.entity_id = entity_id


class InvalidArgument(ServiceError, ValueError):
    kind = "invalid_argument"
    status_code = 400


class InvalidState(ServiceError):
    kind = "invalid_state"
    status_code = 409


class PersistenceError(ServiceError):
    """Storage failure; nothing from the failed unit of work is visible."""

    kind = "persistence_error"
    status_code = 500
