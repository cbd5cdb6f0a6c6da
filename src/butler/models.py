"""
butler.models - Pydantic Models for Templates and Requests
==========================================================

This module defines the data models used throughout butler. Pydantic gives
us validation of configuration files and user answers with clear error
messages, and frozen models for values that must not change once loaded.

Architecture Notes
------------------
    ButlerConfig (loaded from butler.toml)
    ├── default_destination: str
    └── templates: list[TemplateDescriptor]
        ├── name: str
        └── url: str

    ProjectRequest (built from the prompt answers)
    ├── template_name: str
    ├── project_name: str
    └── destination: str

Usage Example
-------------
>>> from butler.models import ButlerConfig, TemplateDescriptor
>>> config = ButlerConfig(
...     templates=[TemplateDescriptor(name="node", url="https://example.com/node-tpl.git")],
... )
>>> config.template_names
['node']
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from butler.errors import ValidationError


DEFAULT_DESTINATION = "./src"


# =============================================================================
# Enumerations
# =============================================================================

class FileRewriteOutcome(str, Enum):
    """
    What happened to a single file during a tree rewrite.

    Attributes
    ----------
    REWRITTEN : str
        The file was rendered and overwritten in place.

    SKIPPED : str
        The file was left untouched because of its extension or name.

    REVERTED : str
        Rendering failed and the original content was kept.
    """

    REWRITTEN = "rewritten"
    SKIPPED = "skipped"
    REVERTED = "reverted"


# =============================================================================
# Template Configuration
# =============================================================================

class TemplateDescriptor(BaseModel):
    """
    A template repository the user can scaffold from.

    Attributes
    ----------
    name : str
        Unique, user facing name shown in the template selection prompt.

    url : str
        Location of the git repository holding the template.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="Display name of the template",
        min_length=1,
    )
    url: str = Field(
        description="Git repository URL of the template",
        min_length=1,
    )

    @field_validator("name", "url")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank values."""
        v = v.strip()
        if not v:
            msg = "value must not be blank"
            raise ValueError(msg)
        return v


class ButlerConfig(BaseModel):
    """
    Complete butler configuration.

    The configuration is normally read from a ``butler.toml`` file (see
    :mod:`butler.config`) but can be built programmatically as well.

    Attributes
    ----------
    templates : list[TemplateDescriptor]
        Ordered list of available templates. The order is the order of the
        choices in the selection prompt.

    default_destination : str
        Default answer for the destination prompt.
    """

    templates: list[TemplateDescriptor] = Field(
        default_factory=list,
        description="Available template repositories",
    )
    default_destination: str = Field(
        default=DEFAULT_DESTINATION,
        description="Default destination path offered by the prompt",
        min_length=1,
    )

    @model_validator(mode="after")
    def validate_unique_names(self) -> ButlerConfig:
        """
        Ensure template names are unique.

        Lookups by name assume at most one match, so a duplicate is rejected
        here once instead of being silently shadowed later.
        """
        seen: set[str] = set()
        for template in self.templates:
            if template.name in seen:
                msg = f"Duplicate template name '{template.name}'"
                raise ValueError(msg)
            seen.add(template.name)
        return self

    @property
    def template_names(self) -> list[str]:
        """Names of all configured templates, in configuration order."""
        return [template.name for template in self.templates]


# =============================================================================
# Project Request
# =============================================================================

class ProjectRequest(BaseModel):
    """
    The answers collected for a single scaffolding run.

    Attributes
    ----------
    template_name : str
        Name of the selected template.

    project_name : str
        Name substituted into the template files.

    destination : str
        Directory the template is cloned into.
    """

    model_config = ConfigDict(frozen=True)

    template_name: str = Field(min_length=1)
    project_name: str = Field(min_length=1)
    destination: str = Field(min_length=1)

    @field_validator("template_name", "project_name", "destination", mode="before")
    @classmethod
    def strip_answers(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip()
        return v

    @classmethod
    def from_answers(
        cls,
        template_name: str | None,
        project_name: str | None,
        destination: str | None,
    ) -> ProjectRequest:
        """
        Build a request from raw prompt answers.

        Raises
        ------
        ValidationError
            If any answer is missing or blank.
        """
        answers = {
            "template_name": template_name or "",
            "project_name": project_name or "",
            "destination": destination or "",
        }
        try:
            return cls(**answers)
        except pydantic.ValidationError as e:
            fields = ", ".join(
                str(error["loc"][0]) for error in e.errors() if error["loc"]
            )
            msg = f"Value is required: {fields}"
            raise ValidationError(msg) from e

    @property
    def destination_path(self) -> Path:
        """The destination as a :class:`Path`, with ``~`` expanded."""
        return Path(self.destination).expanduser()
