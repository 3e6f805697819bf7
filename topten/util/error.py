"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """A required setting is missing or unusable.

    ``setting`` is the environment variable to fix, e.g.
    ``AUTH__SESSION_SECRET``.
    """

    def __init__(self, setting: str, problem: str):
        self.setting = setting
        super().__init__(f"{setting} {problem}")
