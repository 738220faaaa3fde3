"""Unit tests for InstallerConfig loading."""

import pytest

from openvas_installer.config import BASE_PACKAGES, InstallerConfig, load_installer_config


@pytest.mark.unit
class TestInstallerConfig:

    def test_defaults(self):
        cfg = InstallerConfig()

        assert cfg.state_path == "/var/lib/openvas-installer/state.json"
        assert cfg.log_path == "/var/log/openvas-install.log"
        assert cfg.log_alias == "/var/log/openvas_vm_build.log"
        assert cfg.setup_command == ["openvas-setup"]
        assert cfg.feed_sync_command == ["greenbone-feed-sync", "--all"]
        assert cfg.failure_patterns == ["selinux must be disabled"]
        assert cfg.kernel_arg == "selinux=0"
        assert cfg.base_packages == BASE_PACKAGES

    def test_missing_file_means_defaults(self, tmp_path):
        assert load_installer_config(str(tmp_path / "absent.yaml")).raw == {}
        assert load_installer_config(None).raw == {}

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "openvas-installer.yaml"
        path.write_text(
            "paths:\n"
            "  state: /srv/state.env\n"
            "  log_alias: null\n"
            "selinux:\n"
            "  failure_patterns: 'selinux.*disabled'\n"
            "packages:\n"
            "  base: [curl, grubby]\n",
            encoding="utf-8",
        )

        cfg = load_installer_config(str(path))

        assert cfg.state_path == "/srv/state.env"
        assert cfg.log_alias is None
        assert cfg.failure_patterns == ["selinux.*disabled"]
        assert cfg.base_packages == ["curl", "grubby"]

    def test_rejects_non_yaml(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(ValueError):
            load_installer_config(str(path))

    def test_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_installer_config(str(path))

    @pytest.mark.parametrize("body,section", [
        ("paths: foo\n", "paths"),
        ("selinux:\n  - selinux must be disabled\n", "selinux"),
        ("setup: openvas-setup\n", "setup"),
    ])
    def test_rejects_non_mapping_section(self, tmp_path, body, section):
        path = tmp_path / "config.yaml"
        path.write_text(body, encoding="utf-8")

        with pytest.raises(ValueError, match=f"'{section}' must be a mapping"):
            load_installer_config(str(path))

    def test_empty_section_means_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("paths:\nfeeds:\n", encoding="utf-8")

        cfg = load_installer_config(str(path))

        assert cfg.log_path == "/var/log/openvas-install.log"
        assert cfg.feed_sync_command == ["greenbone-feed-sync", "--all"]
