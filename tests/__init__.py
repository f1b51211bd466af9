"""Test suite for workfs.

Test Structure:
- unit/io/: Locators, providers, registry and watcher glob matching
- unit/fs/: File facade, codec and sync wrapper
- unit/config/: Config loading
- unit/utils/: Logging utilities
- unit/cli/: Command-line interface
- conftest.py: Shared provider and facade fixtures
"""
