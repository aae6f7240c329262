"""Custom exceptions for Chronos."""


class ChronosError(Exception):
    """Base exception for all Chronos errors."""


class ConfigError(ChronosError):
    """Configuration-related errors."""


class GraphError(ChronosError):
    """Entity graph loading errors."""


class EntityNotFoundError(GraphError):
    """Raised when an entity id is not present in the graph."""

    def __init__(self, entity_id: str):
        super().__init__(f"Entity '{entity_id}' not found in graph")
        self.entity_id = entity_id
