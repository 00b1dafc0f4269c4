"""Exception hierarchy shared by the registry, workflows and HTTP layer.

Each class carries the HTTP status the API answers with when the error
escapes a request handler.
"""

from __future__ import annotations


class HubError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputError(HubError):
    """Missing or invalid form fields; nothing was mutated."""

    status_code = 400


class ExtractionError(HubError):
    """The uploaded artifact could not be parsed."""

    status_code = 400


class ArtifactValidationError(ExtractionError):
    """The artifact parsed, but a required field came back empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Artifact field '{field}' is empty or unparseable")
        self.field = field


class NotFoundError(HubError):
    status_code = 404


class AppNotFoundError(NotFoundError):
    def __init__(self, package_name: str) -> None:
        super().__init__(f"App '{package_name}' not found")
        self.package_name = package_name


class BuildNotFoundError(NotFoundError):
    def __init__(self, package_name: str, file_name: str) -> None:
        super().__init__(f"Build '{file_name}' not found in app '{package_name}'")
        self.package_name = package_name
        self.file_name = file_name


class AuthorizationError(HubError):
    status_code = 401


class PersistenceError(HubError):
    """Saving or loading the metadata file failed."""

    status_code = 500


class CorruptMetadataError(PersistenceError):
    pass
