"""
butler.errors - Exception Hierarchy
===================================

Every failure butler reports derives from :class:`ButlerError`, so the CLI
can turn any of them into an ``Error:`` line and a non-zero exit status.

    ButlerError
    ├── ValidationError        - a required answer was empty
    ├── ConfigError            - configuration missing or invalid
    ├── TemplateNotFoundError  - no template with the selected name
    ├── CloneError             - the template repository could not be cloned
    ├── WalkSetupError         - the cloned tree could not be traversed
    └── TemplateRenderError    - one file failed to render (recovered)

Only :class:`TemplateRenderError` is recoverable: the rewriter catches it per
file, restores the file and keeps walking.
"""

from __future__ import annotations

from pathlib import Path


class ButlerError(Exception):
    """Base class for all butler errors."""


class ValidationError(ButlerError):
    """A required field was left empty."""


class ConfigError(ButlerError):
    """The configuration file is missing, unreadable or invalid."""


class TemplateNotFoundError(ButlerError):
    """
    The selected template name has no configured descriptor.

    Attributes
    ----------
    name : str
        The template name that could not be resolved.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"template {name} could not be found")


class CloneError(ButlerError):
    """Cloning the template repository failed."""


class WalkSetupError(ButlerError):
    """The destination tree could not be traversed."""


class TemplateRenderError(ButlerError):
    """
    A single file could not be parsed or rendered as a template.

    Attributes
    ----------
    path : Path
        The file that failed.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)
