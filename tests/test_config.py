import pytest

from larktool import config


def test_missing_directory_variable_raises():
    with pytest.raises(config.ConfigError, match="LARK_CONFIG_DIR"):
        config.load_config({})


def test_defaults_and_directory_creation(tmp_path):
    config_dir = tmp_path / "nested" / ".lark"
    cfg = config.load_config({"LARK_CONFIG_DIR": str(config_dir)})
    assert config_dir.is_dir()
    assert cfg.config_dir == config_dir
    assert cfg.timezone == "Asia/Singapore"
    assert cfg.reminder_minutes == 15
    assert cfg.redirect_port == 9999
    assert cfg.app_id == ""
    assert cfg.app_secret == ""


def test_legacy_variable(tmp_path):
    cfg = config.load_config({"LARK_CAL_CONFIG_DIR": str(tmp_path / ".lark")})
    assert cfg.config_dir == tmp_path / ".lark"


def test_primary_variable_wins_over_legacy(tmp_path):
    cfg = config.load_config(
        {
            "LARK_CONFIG_DIR": str(tmp_path / "primary"),
            "LARK_CAL_CONFIG_DIR": str(tmp_path / "legacy"),
        }
    )
    assert cfg.config_dir == tmp_path / "primary"
    assert not (tmp_path / "legacy").exists()


def test_file_values_are_read(tmp_path):
    config_dir = tmp_path / ".lark"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(
        "app_id: cli_example\n"
        "app_secret: secret\n"
        "defaults:\n"
        "  timezone: UTC\n"
        "  reminder_minutes: '20'\n"
        "oauth:\n"
        "  redirect_port: 8080\n",
        encoding="utf-8",
    )
    cfg = config.load_config({"LARK_CONFIG_DIR": str(config_dir)})
    assert cfg.app_id == "cli_example"
    assert cfg.app_secret == "secret"
    assert cfg.timezone == "UTC"
    assert cfg.reminder_minutes == 20
    assert cfg.redirect_port == 8080


def test_partial_section_keeps_other_defaults(tmp_path):
    config_dir = tmp_path / ".lark"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text("defaults:\n  timezone: UTC\n", encoding="utf-8")
    cfg = config.load_config({"LARK_CONFIG_DIR": str(config_dir)})
    assert cfg.timezone == "UTC"
    assert cfg.reminder_minutes == config.DEFAULT_REMINDER_MINUTES
    assert cfg.redirect_port == config.DEFAULT_REDIRECT_PORT


def test_environment_overrides_file(tmp_path):
    config_dir = tmp_path / ".lark"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text("app_id: from_file\n", encoding="utf-8")
    cfg = config.load_config(
        {
            "LARK_CONFIG_DIR": str(config_dir),
            "LARK_APP_ID": "from_env",
            "LARK_APP_SECRET": "secret",
        }
    )
    assert cfg.app_id == "from_env"
    assert cfg.app_secret == "secret"


def test_invalid_yaml_raises(tmp_path):
    config_dir = tmp_path / ".lark"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text("defaults: [unclosed\n", encoding="utf-8")
    with pytest.raises(config.ConfigError, match="error reading config"):
        config.load_config({"LARK_CONFIG_DIR": str(config_dir)})


def test_bad_integer_raises(tmp_path):
    config_dir = tmp_path / ".lark"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(
        "oauth:\n  redirect_port: lots\n", encoding="utf-8"
    )
    with pytest.raises(config.ConfigError, match="failed to unmarshal config"):
        config.load_config({"LARK_CONFIG_DIR": str(config_dir)})


def test_paths(tmp_path):
    config_dir = tmp_path / ".lark"
    cfg = config.load_config({"LARK_CONFIG_DIR": str(config_dir)})
    assert cfg.root_dir == tmp_path
    assert cfg.tokens_file_path() == config_dir / "tokens.json"
    assert cfg.tenant_tokens_file_path() == config_dir / "tenant_tokens.json"