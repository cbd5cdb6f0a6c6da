"""
Tests for butler.models
=======================

Test Organization
-----------------
- TestTemplateDescriptor: Tests for template descriptors
- TestButlerConfig: Tests for the configuration model
- TestProjectRequest: Tests for the user's answers
"""

import pydantic
import pytest
from pathlib import Path

from butler.errors import ValidationError
from butler.models import (
    DEFAULT_DESTINATION,
    ButlerConfig,
    FileRewriteOutcome,
    ProjectRequest,
    TemplateDescriptor,
)


# =============================================================================
# TemplateDescriptor Tests
# =============================================================================

class TestTemplateDescriptor:
    """Tests for the TemplateDescriptor model."""

    def test_fields(self) -> None:
        """Test that name and url are stored."""
        tpl = TemplateDescriptor(name="node", url="https://example.com/node.git")

        assert tpl.name == "node"
        assert tpl.url == "https://example.com/node.git"

    def test_whitespace_is_stripped(self) -> None:
        """Test that surrounding whitespace is removed."""
        tpl = TemplateDescriptor(name="  node ", url=" https://example.com/x.git ")

        assert tpl.name == "node"
        assert tpl.url == "https://example.com/x.git"

    def test_blank_name_rejected(self) -> None:
        """Test that a blank name is invalid."""
        with pytest.raises(pydantic.ValidationError):
            TemplateDescriptor(name="   ", url="https://example.com/x.git")

    def test_empty_url_rejected(self) -> None:
        """Test that an empty url is invalid."""
        with pytest.raises(pydantic.ValidationError):
            TemplateDescriptor(name="node", url="")

    def test_is_immutable(self) -> None:
        """Test that descriptors cannot be modified after loading."""
        tpl = TemplateDescriptor(name="node", url="https://example.com/x.git")

        with pytest.raises(pydantic.ValidationError):
            tpl.name = "other"


# =============================================================================
# ButlerConfig Tests
# =============================================================================

class TestButlerConfig:
    """Tests for the ButlerConfig model."""

    def test_defaults(self) -> None:
        """Test an empty configuration."""
        config = ButlerConfig()

        assert config.templates == []
        assert config.default_destination == DEFAULT_DESTINATION == "./src"

    def test_template_names_keep_order(self) -> None:
        """Test that names are listed in configuration order."""
        config = ButlerConfig(
            templates=[
                {"name": "zeta", "url": "https://example.com/z.git"},
                {"name": "alpha", "url": "https://example.com/a.git"},
            ]
        )

        assert config.template_names == ["zeta", "alpha"]

    def test_duplicate_names_rejected(self) -> None:
        """Test that two templates with the same name are a config error."""
        with pytest.raises(pydantic.ValidationError, match="Duplicate template name 'node'"):
            ButlerConfig(
                templates=[
                    {"name": "node", "url": "https://example.com/a.git"},
                    {"name": "node", "url": "https://example.com/b.git"},
                ]
            )


# =============================================================================
# ProjectRequest Tests
# =============================================================================

class TestProjectRequest:
    """Tests for the ProjectRequest model."""

    def test_from_answers(self) -> None:
        """Test building a request from prompt answers."""
        request = ProjectRequest.from_answers("node", "acme", "./out")

        assert request.template_name == "node"
        assert request.project_name == "acme"
        assert request.destination == "./out"

    def test_answers_are_stripped(self) -> None:
        """Test that surrounding whitespace is removed."""
        request = ProjectRequest.from_answers(" node ", " acme ", " ./out ")

        assert request.project_name == "acme"
        assert request.destination == "./out"

    @pytest.mark.parametrize(
        ("template_name", "project_name", "destination", "field"),
        [
            ("", "acme", "./out", "template_name"),
            ("node", "   ", "./out", "project_name"),
            ("node", "acme", None, "destination"),
        ],
    )
    def test_missing_answer_raises_validation_error(
        self,
        template_name: str,
        project_name: str,
        destination: str | None,
        field: str,
    ) -> None:
        """Test that any empty answer is reported as a ValidationError."""
        with pytest.raises(ValidationError, match=field):
            ProjectRequest.from_answers(template_name, project_name, destination)

    def test_destination_path_expands_user(self) -> None:
        """Test that ~ is expanded in the destination path."""
        request = ProjectRequest.from_answers("node", "acme", "~/projects/acme")

        assert request.destination_path == Path.home() / "projects" / "acme"


class TestFileRewriteOutcome:
    """Tests for the FileRewriteOutcome enumeration."""

    def test_values(self) -> None:
        """Test the outcome values."""
        assert {o.value for o in FileRewriteOutcome} == {"rewritten", "skipped", "reverted"}
