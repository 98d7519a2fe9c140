# stack_engine/errors.py
"""Custom error types for the decision engine."""


class EngineError(Exception):
    """Base error for engine operations."""
    pass


class InfrastructureError(EngineError):
    """A collaborator (catalog, integration graph, ...) could not be reached."""

    def __init__(self, message: str, collaborator: str = None):
        super().__init__(message)
        self.collaborator = collaborator


class ConfigurationError(EngineError):
    """Invalid engine configuration."""

    def __init__(self, message: str, setting: str = None):
        super().__init__(message)
        self.setting = setting


class CatalogFormatError(EngineError):
    """Catalog document is malformed."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


class UnsupportedScenarioError(EngineError, ValueError):
    """No assembly path exists for the requested scenario type."""

    def __init__(self, message: str, scenario_type: str = None):
        super().__init__(message)
        self.scenario_type = scenario_type
