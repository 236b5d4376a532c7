import pytest

from messagebar.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    MessageBarConfig,
    MessageBarPosition,
    load_config,
)
from messagebar.ui.theme import Theme

ENV_VARS = (
    "MESSAGEBAR_VISIBILITY_MS",
    "MESSAGEBAR_POSITION",
    "MESSAGEBAR_ERROR_MAX_LINES",
    "MESSAGEBAR_SUCCESS_MAX_LINES",
    "MESSAGEBAR_SHOW_CONFIRMATION",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = MessageBarConfig()
    assert config.visibility_duration_ms == 3000
    assert config.position is MessageBarPosition.TOP
    assert config.error_max_lines == 1
    assert config.success_max_lines == 1
    assert config.show_confirmation_on_copy is False
    assert config.theme == Theme()


def test_load_yaml(tmp_path):
    path = tmp_path / "bar.yaml"
    path.write_text(
        "message_bar:\n"
        "  visibility_duration_ms: 1500\n"
        "  position: bottom\n"
        "  error_max_lines: 3\n"
        "  show_confirmation_on_copy: true\n"
        "theme:\n"
        "  error_container: '#ff0000'\n"
        "  success_icon: info\n"
    )
    config = load_config(str(path))
    assert config.visibility_duration_ms == 1500
    assert config.position is MessageBarPosition.BOTTOM
    assert config.error_max_lines == 3
    assert config.show_confirmation_on_copy is True
    assert config.theme.error_container == (255, 0, 0)
    assert config.theme.success_icon == "info"


def test_missing_file_uses_defaults(tmp_path, caplog):
    config = load_config(str(tmp_path / "nope.yaml"))
    assert config == MessageBarConfig()
    assert "Config file not found" in caplog.text


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("MESSAGEBAR_VISIBILITY_MS", "750")
    monkeypatch.setenv("MESSAGEBAR_POSITION", "BOTTOM")
    monkeypatch.setenv("MESSAGEBAR_SHOW_CONFIRMATION", "yes")
    config = load_config(str(tmp_path / "nope.yaml"))
    assert config.visibility_duration_ms == 750
    assert config.position is MessageBarPosition.BOTTOM
    assert config.show_confirmation_on_copy is True


def test_default_yaml_matches_defaults():
    assert load_config() == MessageBarConfig()


@pytest.mark.parametrize("data", [
    {"visibility_duration_ms": 0},
    {"visibility_duration_ms": "soon"},
    {"visibility_duration_ms": 1500.9},
    {"error_max_lines": True},
    {"success_max_lines": 2.5},
    {"position": "left"},
    {"error_max_lines": 0},
    {"show_confirmation_on_copy": "maybe"},
    {"theme": {"error_container": [300, 0, 0]}},
    {"theme": {"success_container": "#12"}},
])
def test_invalid_values_raise(data):
    with pytest.raises(ConfigError):
        MessageBarConfig.from_dict(data)


def test_unknown_icon_keeps_default():
    theme = Theme.from_dict({"error_icon": "skull"})
    assert theme.error_icon == "warning"


def test_whole_number_floats_accepted():
    config = MessageBarConfig.from_dict({"visibility_duration_ms": 1500.0, "error_max_lines": "2"})
    assert config.visibility_duration_ms == 1500
    assert config.error_max_lines == 2


def test_defaults_file_ships_inside_package():
    assert DEFAULT_CONFIG_PATH.is_file()
    assert DEFAULT_CONFIG_PATH.parent.name == "messagebar"
