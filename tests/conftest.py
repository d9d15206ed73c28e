"""
Shared test configuration and fixtures.

Provides validator and reloader doubles so store tests never spawn nfsd,
and a factory for exports files in a temporary directory.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from nfs_export_blocks.daemon import DaemonReloader, ExportsValidator, ValidationResult
from nfs_export_blocks.store import ExportBlockStore, StoreConfig

SAMPLE_EXPORT = "/Users 192.168.64.1 -alldirs -maproot=root"


class RecordingValidator(ExportsValidator):
    """
    Validator double that records candidates.

    Rejects any candidate containing one of the configured fragments.
    """

    def __init__(self, reject: tuple[bytes, ...] = (), diagnostics: str = "bad export"):
        self.reject = reject
        self.diagnostics = diagnostics
        self.candidates: list[bytes] = []

    async def validate(self, candidate: bytes) -> ValidationResult:
        self.candidates.append(candidate)
        if any(fragment in candidate for fragment in self.reject):
            return ValidationResult(valid=False, diagnostics=self.diagnostics, returncode=1)
        return ValidationResult(valid=True)


class RecordingReloader(DaemonReloader):
    """Reloader double that counts calls."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = 0

    async def reload(self) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


@pytest.fixture
def validator() -> RecordingValidator:
    return RecordingValidator()


@pytest.fixture
def reloader() -> RecordingReloader:
    return RecordingReloader()


@pytest.fixture
def store(validator: RecordingValidator, reloader: RecordingReloader) -> ExportBlockStore:
    return ExportBlockStore(validator, reloader, StoreConfig())


@pytest.fixture
def exports_file(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing exports content to a temporary file."""

    def _create(content: str, name: str = "exports") -> Path:
        path = tmp_path / name
        path.write_bytes(content.encode())
        return path

    return _create
