"""
butler.rewriter - Project Name Substitution
===========================================

After a template repository has been cloned, this module walks the cloned
tree and renders every eligible text file in place, substituting the project
name for its placeholder.

Walk Rules
----------
The walk is pre-order and depth first, visiting entries of each directory in
lexical order:

- Directories named in :data:`BLACKLIST_DIRS` and hidden directories are
  pruned, nothing below them is touched.
- Files are rendered only when their lowercased name ends with one of
  :data:`ALLOWED_EXTENSIONS`. Everything else is left byte for byte intact.
- Hidden files and symbolic links are never rendered.

Template Syntax
---------------
Files are rendered with Jinja2 using square bracket delimiters::

    [[ ProjectName ]]      variable
    [[ .ProjectName ]]     same, with a leading dot
    [[# comment #]]        comment, dropped

This keeps ``{{ }}``, ``{% %}`` and ``{# #}`` sequences that the scaffolded
project itself uses (Jinja, Mustache, Handlebars...) out of the way.
``ProjectName`` is the only thing that can be substituted: block tags
(``[[% ... %]]``) and any other expression, such as a YAML ``[[3.11, 3.12]]``
matrix, make the file an invalid template. Line endings follow the first
line ending found in the file.

Error Handling
--------------
A file that fails to decode, parse, render or write is restored to its
original bytes and reported with a warning line; the walk continues. Failures
that prevent the walk itself (missing root, unlistable directory, failing
stat) raise :class:`~butler.errors.WalkSetupError`.
"""

from __future__ import annotations

import re
import stat
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import StrictUndefined, TemplateError, nodes
from jinja2.sandbox import SandboxedEnvironment
from rich.console import Console

from butler.errors import TemplateRenderError, WalkSetupError
from butler.models import FileRewriteOutcome


# =============================================================================
# Module-Level Configuration
# =============================================================================

console = Console()

TOOL_NAME = "butler"

VARIABLE_START = "[["
VARIABLE_END = "]]"
PROJECT_NAME_VARIABLE = "ProjectName"

ALLOWED_EXTENSIONS: tuple[str, ...] = (
    ".md",
    ".txt",
    ".html",
    ".htm",
    ".rtf",
    ".json",
    ".yml",
    ".csproj",
    ".sln",
)

BLACKLIST_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        "bower_components",
        "jspm_packages",
        "dist",
        "logs",
        "bin",
    }
)

# "[[ .Name" -> "[[ Name"
_LEADING_DOT_PATTERN = re.compile(r"(\[\[-?\s*)\.(?=[A-Za-z_])")

_NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class RewriteReport:
    """
    Outcome of a tree rewrite.

    Attributes
    ----------
    root : Path
        The directory that was walked.

    rewritten : list[Path]
        Files rendered and overwritten in place.

    skipped : list[Path]
        Files visited but left untouched (extension, hidden, symlink).

    reverted : list[Path]
        Files that failed to render and were restored.

    pruned_dirs : list[Path]
        Directories that were not descended into.
    """

    root: Path
    rewritten: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    reverted: list[Path] = field(default_factory=list)
    pruned_dirs: list[Path] = field(default_factory=list)

    def record(self, path: Path, outcome: FileRewriteOutcome) -> None:
        if outcome is FileRewriteOutcome.REWRITTEN:
            self.rewritten.append(path)
        elif outcome is FileRewriteOutcome.REVERTED:
            self.reverted.append(path)
        else:
            self.skipped.append(path)

    @property
    def visited_count(self) -> int:
        return len(self.rewritten) + len(self.skipped) + len(self.reverted)


# =============================================================================
# Template Engine Setup
# =============================================================================

def create_jinja_env() -> SandboxedEnvironment:
    """
    Create the Jinja2 environment used to render template files.

    The environment is sandboxed since templates come from remote
    repositories, undefined names raise instead of rendering empty, and
    trailing newlines are preserved so untouched lines stay identical.

    Returns
    -------
    SandboxedEnvironment
        Environment configured with square bracket delimiters.
    """
    return SandboxedEnvironment(
        variable_start_string=VARIABLE_START,
        variable_end_string=VARIABLE_END,
        block_start_string="[[%",
        block_end_string="%]]",
        comment_start_string="[[#",
        comment_end_string="#]]",
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_text(env: SandboxedEnvironment, source: str, project_name: str, path: Path) -> str:
    """
    Render ``source`` with the project name bound to ``ProjectName``.

    Raises
    ------
    TemplateRenderError
        If the template cannot be parsed or rendered.
    """
    normalized = _LEADING_DOT_PATTERN.sub(r"\1", source)

    # Jinja rewrites every line ending to newline_sequence
    newline = _NEWLINE_PATTERN.search(source)
    if newline is not None and newline.group() != env.newline_sequence:
        env = env.overlay(newline_sequence=newline.group())

    try:
        tree = env.parse(normalized)
        check_placeholders(tree, path)
        return env.from_string(tree).render({PROJECT_NAME_VARIABLE: project_name})
    except TemplateError as e:
        raise TemplateRenderError(path, str(e)) from e


def check_placeholders(tree: nodes.Template, path: Path) -> None:
    """
    Reject templates that do more than print ``ProjectName``.

    Only literal text and bare ``[[ ProjectName ]]`` references are allowed;
    block tags and any other expression (literals, lists, attribute access,
    filters, other names) make the file an invalid template.

    Raises
    ------
    TemplateRenderError
        On the first unsupported construct.
    """
    for node in tree.body:
        if not isinstance(node, nodes.Output):
            raise TemplateRenderError(
                path,
                f"line {node.lineno}: unsupported tag '{type(node).__name__}'",
            )
        for child in node.nodes:
            if isinstance(child, nodes.TemplateData):
                continue
            if isinstance(child, nodes.Name) and child.name == PROJECT_NAME_VARIABLE:
                continue
            raise TemplateRenderError(
                path,
                f"line {child.lineno}: only [[ .{PROJECT_NAME_VARIABLE} ]] "
                f"can be substituted, found '{type(child).__name__}'",
            )


# =============================================================================
# Visit Policies
# =============================================================================

def is_pruned_dir(name: str) -> bool:
    """Whether a directory with this base name must not be descended into."""
    return name.startswith(".") or name in BLACKLIST_DIRS


def has_allowed_extension(name: str) -> bool:
    """Whether a file with this base name is eligible for rewriting."""
    return name.lower().endswith(ALLOWED_EXTENSIONS)


# =============================================================================
# File Rewriting
# =============================================================================

def warn_recovered(path: Path, error: Exception) -> None:
    """Print the warning line for a file that was left in its original state."""
    console.print(
        f"{TOOL_NAME}: File {path} recovered due to invalid template! Error: {error}",
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def rewrite_file(env: SandboxedEnvironment, path: Path, project_name: str) -> FileRewriteOutcome:
    """
    Render a single file in place.

    The file is rendered entirely in memory before it is opened for writing.
    If writing fails part way, the original bytes are written back.

    Returns
    -------
    FileRewriteOutcome
        ``REWRITTEN`` on success, ``REVERTED`` if the file was left as it was.
    """
    try:
        original = path.read_bytes()
    except OSError as e:
        warn_recovered(path, e)
        return FileRewriteOutcome.REVERTED

    try:
        source = original.decode("utf-8")
        rendered = render_text(env, source, project_name, path)
    except (UnicodeDecodeError, TemplateRenderError) as e:
        warn_recovered(path, e)
        return FileRewriteOutcome.REVERTED

    truncated = False
    try:
        with path.open("wb") as f:
            truncated = True
            f.write(rendered.encode("utf-8"))
    except OSError as e:
        if truncated:
            _restore(path, original)
        warn_recovered(path, e)
        return FileRewriteOutcome.REVERTED

    return FileRewriteOutcome.REWRITTEN


def _restore(path: Path, original: bytes) -> None:
    try:
        with path.open("wb") as f:
            f.write(original)
    except OSError as e:
        console.print(
            f"{TOOL_NAME}: Could not restore {path}: {e}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


# =============================================================================
# Tree Walk
# =============================================================================

def _lstat(path: Path) -> int:
    try:
        return path.lstat().st_mode
    except OSError as e:
        raise WalkSetupError(f"Cannot stat {path}: {e}") from e


def _list_directory(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise WalkSetupError(f"Cannot list directory {directory}: {e}") from e


def _walk(
    env: SandboxedEnvironment,
    directory: Path,
    project_name: str,
    report: RewriteReport,
) -> None:
    for entry in _list_directory(directory):
        mode = _lstat(entry)

        if stat.S_ISDIR(mode):
            if is_pruned_dir(entry.name):
                report.pruned_dirs.append(entry)
                continue
            _walk(env, entry, project_name, report)
            continue

        if (
            not stat.S_ISREG(mode)
            or entry.name.startswith(".")
            or not has_allowed_extension(entry.name)
        ):
            report.record(entry, FileRewriteOutcome.SKIPPED)
            continue

        report.record(entry, rewrite_file(env, entry, project_name))


def rewrite_tree(root: str | Path, project_name: str) -> RewriteReport:
    """
    Substitute ``project_name`` into every eligible file under ``root``.

    Parameters
    ----------
    root : str | Path
        Directory to walk. The root itself is always descended into, even
        if its own name would be pruned.

    project_name : str
        Value bound to the ``ProjectName`` placeholder.

    Returns
    -------
    RewriteReport
        What happened to each visited file.

    Raises
    ------
    WalkSetupError
        If ``root`` is not a readable directory, or a directory below it
        cannot be listed or stat'ed. Per-file template failures never raise.

    Examples
    --------
    >>> report = rewrite_tree("./out", "acme")
    >>> [p.name for p in report.rewritten]
    ['README.md']
    """
    root = Path(root)
    try:
        mode = root.stat().st_mode
    except OSError as e:
        raise WalkSetupError(f"Cannot access {root}: {e}") from e
    if not stat.S_ISDIR(mode):
        raise WalkSetupError(f"{root} is not a directory")

    env = create_jinja_env()
    report = RewriteReport(root=root)
    _walk(env, root, project_name, report)
    return report
