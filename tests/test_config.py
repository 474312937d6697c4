import pytest

from dbx_config import ConfigError, ShellConfig, load_config


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(str(tmp_path / "absent.yaml"))
    assert cfg == ShellConfig()
    assert cfg.transcript_prefix == "dbx_shell_transcript"
    assert cfg.access_token is None


def test_values_are_read_and_coerced(tmp_path):
    path = tmp_path / "dbx_shell.yaml"
    path.write_text(
        "app_name: myapp\n"
        "access_token: 12345\n"
        "log_level: debug\n"
        "colour: false\n"
        "unknown_key: ignored\n"
    )
    cfg = load_config(str(path))
    assert cfg.app_name == "myapp"
    assert cfg.access_token == "12345"
    assert cfg.log_level == "DEBUG"
    assert cfg.colour is False


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == ShellConfig()


def test_bad_yaml_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("app_name: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_non_mapping_raises(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigError, match="expected a mapping"):
        load_config(str(path))
