"""
butler test suite
=================

Test Modules
------------
- test_models.py: Tests for the Pydantic models
- test_config.py: Tests for configuration discovery and loading
- test_git.py: Tests for template repository cloning
- test_rewriter.py: Tests for the tree walk and file rewriting
- test_scaffolder.py: Tests for template resolution and the full pipeline
- test_cli.py: Tests for the command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_rewriter.py

    # Run specific test class
    pytest tests/test_rewriter.py::TestDirectoryPruning
"""
