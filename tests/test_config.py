import json

import pytest

from sproutee.config import (
    CONFIG_FILE_NAME,
    Config,
    ConfigError,
    create_default_config_file,
    default_config,
    find_config_file,
    load_config,
    load_config_from_current_dir,
    save_config,
)


def test_default_config_has_empty_copy_files():
    config = default_config()
    assert config.copy_files == []


def test_validate_rejects_missing_copy_files():
    with pytest.raises(ConfigError, match="copy_files field is required"):
        Config(copy_files=None).validate()


@pytest.mark.parametrize(
    "copy_files",
    [[".env", "docker-compose.yml"], []],
    ids=["valid config", "empty copy_files"],
)
def test_valid_configs_round_trip(tmp_path, copy_files):
    path = tmp_path / "cfg.json"
    save_config(Config(copy_files=copy_files), path)
    assert load_config(path) == Config(copy_files=copy_files)


def test_find_config_file_in_parent(tmp_path):
    sub_dir = tmp_path / "subdir"
    sub_dir.mkdir()
    config_path = tmp_path / CONFIG_FILE_NAME
    config_path.write_text('{"copy_files": []}')

    assert find_config_file(sub_dir) == config_path


def test_find_config_file_missing(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        find_config_file(tmp_path)


def test_load_valid_config(tmp_path):
    path = tmp_path / "test_valid.json"
    path.write_text('{"copy_files": [".env", "docker-compose.yml"]}')
    config = load_config(path)
    assert len(config.copy_files) == 2
    assert config.copy_files[0] == ".env"


@pytest.mark.parametrize(
    "content, message",
    [
        ('{"copy_files": [".env"', "failed to parse config file"),
        ('{"copy_files": null}', "invalid configuration"),
        ("{}", "invalid configuration"),
        ('{"copy_files": "x"}', "failed to parse config file"),
        ('{"copy_files": [1, 2]}', "failed to parse config file"),
        ("[1, 2]", "failed to parse config file"),
    ],
)
def test_load_invalid_config(tmp_path, content, message):
    path = tmp_path / "bad.json"
    path.write_text(content)
    with pytest.raises(ConfigError, match=message):
        load_config(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="failed to read config file"):
        load_config(tmp_path / "absent.json")


def test_save_config_writes_indented_json(tmp_path):
    path = tmp_path / "test_config.json"
    config = Config(copy_files=[".env", "docker-compose.yml"])
    save_config(config, path)

    assert path.read_text() == (
        '{\n  "copy_files": [\n    ".env",\n    "docker-compose.yml"\n  ]\n}'
    )
    loaded = load_config(path)
    assert len(loaded.copy_files) == len(config.copy_files)


def test_save_config_rejects_invalid(tmp_path):
    path = tmp_path / "out.json"
    with pytest.raises(ConfigError, match="invalid configuration"):
        save_config(Config(copy_files=None), path)
    assert not path.exists()


def test_create_default_config_file(tmp_path):
    path = tmp_path / "new_config.json"
    create_default_config_file(path)

    assert json.loads(path.read_text()) == {"copy_files": []}
    assert load_config(path).copy_files == []

    with pytest.raises(ConfigError, match="already exists"):
        create_default_config_file(path)


def test_dict_round_trip():
    config = Config(copy_files=["a", "b/c"])
    assert config.to_dict() == {"copy_files": ["a", "b/c"]}
    assert Config.from_dict(config.to_dict()) == config


def test_from_dict_missing_key_gives_none():
    assert Config.from_dict({}).copy_files is None


def test_load_config_from_current_dir(tmp_path, monkeypatch):
    (tmp_path / CONFIG_FILE_NAME).write_text('{"copy_files": [".env"]}')
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert load_config_from_current_dir().copy_files == [".env"]