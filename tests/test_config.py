# tests/test_config.py
"""
Tests for timing configuration.
"""

import threading

import pytest

from uiauto_macos.config import TimeConfig, TimeoutSettings, available_presets
from uiauto_macos.exceptions import ConfigError


class TestTimeConfig:
    """Tests for presets, overrides and scoping."""

    def test_defaults(self):
        cfg = TimeConfig.current()
        assert cfg.poll == TimeoutSettings(timeout=5.0, interval=0.1)
        assert cfg.element_match.timeout == 5.0

    def test_presets(self):
        assert set(available_presets()) == {"default", "fast", "slow", "ci"}
        assert TimeConfig("fast").poll.interval == 0.05
        assert TimeConfig("ci").external_wait.timeout == 180.0

    def test_preset_keeps_unlisted_fields(self):
        # fast overrides only the timeout of external_wait
        assert TimeConfig("fast").external_wait.interval == 0.1

    def test_unknown_preset(self):
        with pytest.raises(ConfigError):
            TimeConfig.build_from(preset="turbo")

    def test_build_from_overrides(self):
        cfg = TimeConfig.build_from(preset="slow", overrides={"poll": {"interval": 0.5}})
        assert cfg.poll.interval == 0.5
        assert cfg.poll.timeout == 10.0

    def test_unknown_override_field(self):
        with pytest.raises(ConfigError):
            TimeConfig.build_from(overrides={"click_action": {"timeout": 1}})

    def test_override_is_temporary(self):
        with TimeConfig.override(poll={"timeout": 1.0}) as cfg:
            assert TimeConfig.current() is cfg
            assert TimeConfig.current().poll.timeout == 1.0
        assert TimeConfig.current().poll.timeout == 5.0

    def test_run_config_is_thread_local(self):
        TimeConfig.install_run_config(TimeConfig("ci"))
        seen = {}

        def worker():
            seen["timeout"] = TimeConfig.current().poll.timeout

        t = threading.Thread(target=worker)
        t.start()
        t.join()

        assert TimeConfig.current().poll.timeout == 20.0
        assert seen["timeout"] == 5.0

    def test_clone_is_independent(self):
        cfg = TimeConfig("fast")
        clone = cfg.clone()
        clone.poll.timeout = 99.0
        assert cfg.poll.timeout == 3.0
        assert clone.to_dict()["poll"]["timeout"] == 99.0


class TestFromYaml:
    """Tests for YAML timings files."""

    def test_loads_preset_and_overrides(self, tmp_path):
        path = tmp_path / "timings.yaml"
        path.write_text(
            "preset: fast\n"
            "overrides:\n"
            "  element_match: {timeout: 8.0, interval: 0.25}\n",
            encoding="utf-8",
        )
        cfg = TimeConfig.from_yaml(str(path))
        assert cfg.element_match == TimeoutSettings(timeout=8.0, interval=0.25)
        assert cfg.poll.timeout == 3.0

    def test_empty_file_is_default(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert TimeConfig.from_yaml(str(path)).to_dict() == TimeConfig().to_dict()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            TimeConfig.from_yaml(str(tmp_path / "nope.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("preset: [fast\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            TimeConfig.from_yaml(str(path))

    def test_schema_violations_are_listed(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "preset: turbo\n"
            "overrides:\n"
            "  poll: {timeout: -1}\n"
            "  click: {timeout: 1}\n",
            encoding="utf-8",
        )
        with pytest.raises(ConfigError) as exc_info:
            TimeConfig.from_yaml(str(path))
        message = str(exc_info.value)
        assert "turbo" in message
        assert "click" in message
