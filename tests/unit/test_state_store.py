"""Unit tests for FileStateStore."""

import json

import pytest

from openvas_installer.phases import Phase
from openvas_installer.state_store import FileStateStore


@pytest.mark.unit
class TestFileStateStore:
    """Persisted phase record."""

    @pytest.mark.parametrize("suffix", ["json", "yaml", "env"])
    @pytest.mark.parametrize("phase", list(Phase))
    def test_load_returns_saved_phase(self, tmp_path, suffix, phase):
        """save(P) then load() returns P for every phase and format."""
        store = FileStateStore(str(tmp_path / f"state.{suffix}"))

        store.save(phase)

        assert FileStateStore(str(tmp_path / f"state.{suffix}")).load() == phase

    def test_missing_file_defaults_to_start(self, tmp_path):
        store = FileStateStore(str(tmp_path / "nope" / "state.json"))
        assert store.load() == Phase.START

    @pytest.mark.parametrize(
        "name,content",
        [
            ("state.json", "{not json"),
            ("state.json", "[1, 2, 3]"),
            ("state.json", '{"other": "value"}'),
            ("state.json", '{"phase": "rebooting"}'),
            ("state.json", ""),
            ("state.yaml", "phase: [unclosed"),
            ("state.env", "# nothing here\n"),
        ],
    )
    def test_corrupt_file_defaults_to_start(self, tmp_path, name, content):
        """Unparsable or phase-less content never raises."""
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")

        assert FileStateStore(str(path)).load() == Phase.START

    def test_unreadable_file_defaults_to_start(self, tmp_path):
        """A directory where the file should be is treated as unreadable."""
        path = tmp_path / "state.json"
        path.mkdir()

        assert FileStateStore(str(path)).load() == Phase.START

    def test_loads_shell_installer_state_file(self, tmp_path):
        """State written by the original shell installer resumes correctly."""
        path = tmp_path / "state.env"
        path.write_text('PHASE="postreboot_setup"\n', encoding="utf-8")

        assert FileStateStore(str(path)).load() == Phase.POSTREBOOT_SETUP

    def test_save_creates_parent_directories(self, tmp_path):
        path = tmp_path / "var" / "lib" / "openvas-installer" / "state.json"

        FileStateStore(str(path)).save(Phase.SETUP)

        assert json.loads(path.read_text(encoding="utf-8")) == {"phase": "setup"}

    def test_last_write_wins_and_leaves_no_temp_files(self, tmp_path):
        store = FileStateStore(str(tmp_path / "state.json"))

        store.save(Phase.SETUP)
        store.save(Phase.FEEDS)
        store.save(Phase.DONE)

        assert store.load() == Phase.DONE
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_read_only_store_does_not_write(self, tmp_path):
        path = tmp_path / "state.json"
        store = FileStateStore(str(path), read_only=True)

        store.save(Phase.DONE)

        assert not path.exists()
        assert store.load() == Phase.START
