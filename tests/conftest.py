"""Shared pytest fixtures for workfs tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from workfs.core.config.models import FacadeConfig
from workfs.core.fs import FileSystemFacade
from workfs.core.io import (
    FILE_SCHEME,
    LocalFileSystemProvider,
    MemoryFileSystemProvider,
    ProviderRegistry,
    ResourceLocator,
)

MEMORY_SCHEME = "memfs"


# ============================================================================
# Provider Fixtures
# ============================================================================


@pytest.fixture
def memory_provider() -> MemoryFileSystemProvider:
    """Provide fresh in-memory provider."""
    return MemoryFileSystemProvider()


@pytest.fixture
def local_provider() -> LocalFileSystemProvider:
    """Provide local disk provider."""
    return LocalFileSystemProvider()


@pytest.fixture
def registry(
    memory_provider: MemoryFileSystemProvider, local_provider: LocalFileSystemProvider
) -> ProviderRegistry:
    """Provide registry with memfs and file schemes."""
    r = ProviderRegistry()
    r.register_provider(MEMORY_SCHEME, memory_provider)
    r.register_provider(FILE_SCHEME, local_provider)
    return r


# ============================================================================
# Facade Fixtures
# ============================================================================


@pytest.fixture
def facade(registry: ProviderRegistry) -> FileSystemFacade:
    """Facade whose plain string paths address the in-memory scheme."""
    return FileSystemFacade(
        registry, FacadeConfig(default_scheme=MEMORY_SCHEME, use_trash=False)
    )


@pytest.fixture
def local_facade(registry: ProviderRegistry) -> FileSystemFacade:
    """Facade whose plain string paths address the local disk (no trash)."""
    return FileSystemFacade(registry, FacadeConfig(use_trash=False))


@pytest.fixture
def mem_root() -> ResourceLocator:
    """Root locator used by in-memory tests."""
    return ResourceLocator(scheme=MEMORY_SCHEME, path="/test")


@pytest.fixture
def local_root(tmp_path: Path) -> ResourceLocator:
    """Locator of a per-test temporary directory."""
    return ResourceLocator.file(tmp_path)
