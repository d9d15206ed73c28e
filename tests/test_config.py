"""Tests for StoreConfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from nfs_export_blocks.exceptions import ExportsIOError, InvalidConfigError
from nfs_export_blocks.store import ReloaderKind, StoreConfig, ValidatorKind

ENV_VARS = (
    "NFS_EXPORTS_FILE",
    "NFS_EXPORTS_NFSD_PATH",
    "NFS_EXPORTS_EXPORTFS_PATH",
    "NFS_EXPORTS_SUDO_PATH",
    "NFS_EXPORTS_USE_SUDO",
    "NFS_EXPORTS_VALIDATOR",
    "NFS_EXPORTS_RELOADER",
    "NFS_EXPORTS_ENCODING",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestStoreConfig:
    """Tests for StoreConfig defaults and path resolution."""

    def test_defaults(self) -> None:
        config = StoreConfig()

        assert config.exports_path == "/etc/exports"
        assert config.nfsd_path == "/sbin/nfsd"
        assert config.use_sudo is True
        assert config.validator is ValidatorKind.NFSD
        assert config.reloader is ReloaderKind.NFSD
        assert config.file_mode == 0o644

    def test_resolve_empty_path(self) -> None:
        config = StoreConfig(exports_path="/srv/exports")

        assert config.resolve_path("") == Path("/srv/exports")
        assert config.resolve_path(None) == Path("/srv/exports")
        assert config.resolve_path("relative/exports") == Path("relative/exports")


class TestFromEnvironment:
    def test_empty_environment(self) -> None:
        assert StoreConfig.from_environment() == StoreConfig()

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NFS_EXPORTS_FILE", "/srv/exports")
        monkeypatch.setenv("NFS_EXPORTS_USE_SUDO", "false")
        monkeypatch.setenv("NFS_EXPORTS_VALIDATOR", "NONE")
        monkeypatch.setenv("NFS_EXPORTS_RELOADER", "exportfs")

        config = StoreConfig.from_environment()

        assert config.exports_path == "/srv/exports"
        assert config.use_sudo is False
        assert config.validator is ValidatorKind.NONE
        assert config.reloader is ReloaderKind.EXPORTFS

    def test_unknown_kinds_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NFS_EXPORTS_VALIDATOR", "bogus")
        monkeypatch.setenv("NFS_EXPORTS_RELOADER", "bogus")

        config = StoreConfig.from_environment()

        assert config.validator is ValidatorKind.NFSD
        assert config.reloader is ReloaderKind.NFSD


class TestFromYaml:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert StoreConfig.from_yaml(tmp_path / "settings.yaml") == StoreConfig()

    def test_exports_section(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(
            "exports:\n"
            "  path: /srv/exports\n"
            "  use_sudo: false\n"
            "  validator: none\n"
            "  reloader: exportfs\n"
            "  file_mode: '0600'\n"
        )

        config = StoreConfig.from_yaml(path)

        assert config.exports_path == "/srv/exports"
        assert config.use_sudo is False
        assert config.validator is ValidatorKind.NONE
        assert config.reloader is ReloaderKind.EXPORTFS
        assert config.file_mode == 0o600
        assert config.nfsd_path == "/sbin/nfsd"

    def test_no_section(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("identity:\n  user_id: someone\n")

        assert StoreConfig.from_yaml(path) == StoreConfig()

    def test_malformed(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("exports: [unclosed\n")

        with pytest.raises(ExportsIOError) as exc_info:
            StoreConfig.from_yaml(path)

        assert exc_info.value.operation == "read_config"

    @pytest.mark.parametrize("written", ["644", "0644", "0o644", "'644'", "'0o644'"])
    def test_file_mode_is_octal(self, tmp_path: Path, written: str) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(f"exports:\n  file_mode: {written}\n")

        assert StoreConfig.from_yaml(path).file_mode == 0o644

    @pytest.mark.parametrize("written", ["755", "4644", "1644"])
    def test_file_mode_rejects_execute_and_special_bits(
        self, tmp_path: Path, written: str
    ) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(f"exports:\n  file_mode: {written}\n")

        with pytest.raises(InvalidConfigError) as exc_info:
            StoreConfig.from_yaml(path)

        assert exc_info.value.field == "file_mode"

    @pytest.mark.parametrize("written", ["rw-r--r--", "648", "true", "[6, 4, 4]"])
    def test_file_mode_must_be_octal(self, tmp_path: Path, written: str) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(f"exports:\n  file_mode: {written}\n")

        with pytest.raises(InvalidConfigError):
            StoreConfig.from_yaml(path)

    def test_unknown_kinds_fall_back(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("exports:\n  validator: bogus\n  reloader: bogus\n")

        config = StoreConfig.from_yaml(path)

        assert config.validator is ValidatorKind.NFSD
        assert config.reloader is ReloaderKind.NFSD

    def test_use_sudo_numeric(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("exports:\n  use_sudo: 0\n")

        assert StoreConfig.from_yaml(path).use_sudo is False


class TestFileModeCheck:
    def test_rejects_execute_bits(self) -> None:
        with pytest.raises(InvalidConfigError) as exc_info:
            StoreConfig(file_mode=0o755)

        assert exc_info.value.value == "0o755"

    def test_accepts_read_write_modes(self) -> None:
        assert StoreConfig(file_mode=0o600).file_mode == 0o600
