"""Domain-specific exceptions, framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class SearchEngineError(Exception):
    """Raised when the search engine answers a request with an error.

    Covers malformed queries, missing indices and server-side faults.
    Connection failures are not wrapped and surface as transport errors.
    """

    def __init__(self, status_code: int, error_type: str, reason: str):
        self.status_code = status_code
        self.error_type = error_type
        self.reason = reason
        super().__init__(f"[{error_type}] {status_code}: {reason}")
