"""
butler - Project Scaffolding from Template Repositories
=======================================================

A CLI tool that creates new projects from remote git template repositories.
It asks which template to use, what the project is called and where it
should live, clones the template and substitutes the project name into the
text files of the cloned tree.

Quick Start
-----------
```bash
# List the templates configured in butler.toml
butler list

# Scaffold a project interactively
butler template
```

Template Syntax
---------------
Placeholders use square bracket delimiters so that ``{{ }}`` expressions
already present in template files are left alone::

    # [[ .ProjectName ]]

Architecture
------------
- ``cli``: Typer-based command line interface and interactive prompts
- ``config``: Configuration file discovery and loading
- ``models``: Pydantic models for templates and project requests
- ``git``: Cloning of template repositories
- ``rewriter``: Walks the cloned tree and rewrites eligible files
- ``scaffolder``: Template resolution and the end-to-end pipeline
- ``errors``: Exception hierarchy
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from butler.errors import (
    ButlerError,
    CloneError,
    ConfigError,
    TemplateNotFoundError,
    TemplateRenderError,
    ValidationError,
    WalkSetupError,
)
from butler.models import ButlerConfig, ProjectRequest, TemplateDescriptor
from butler.rewriter import rewrite_tree
from butler.scaffolder import resolve_template, scaffold_project


__all__ = [
    # Configuration models
    "ButlerConfig",
    "ProjectRequest",
    "TemplateDescriptor",
    # Errors
    "ButlerError",
    "CloneError",
    "ConfigError",
    "TemplateNotFoundError",
    "TemplateRenderError",
    "ValidationError",
    "WalkSetupError",
    # Version info
    "__version__",
    # Core functions
    "resolve_template",
    "rewrite_tree",
    "scaffold_project",
]
