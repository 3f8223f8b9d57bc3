"""Tests for INI configuration loading."""

from configparser import ConfigParser

import pytest

from sampsync.system import SyncConfig, load_sync_config, validate_sync_config
from sampsync.util import DEFAULT_POLL_INTERVAL, DEFAULT_SAMPLE_PACK_IDS


def _write(tmp_path, text):
    path = tmp_path / "sampsync.ini"
    path.write_text(text)
    return path


def test_defaults():
    config = SyncConfig()
    assert config.default_pack_ids == list(DEFAULT_SAMPLE_PACK_IDS)
    assert config.poll_interval == DEFAULT_POLL_INTERVAL
    # defaults aren't shared between instances
    config.default_pack_ids.append("X")
    assert SyncConfig().default_pack_ids == list(DEFAULT_SAMPLE_PACK_IDS)


def test_load(tmp_path):
    path = _write(
        tmp_path,
        """
[sampsync]
server_url = https://samples.example.org
device_kind = DRUMBOX
poll_interval = 0.5
default_pack_ids = A, , B,
""",
    )
    config = load_sync_config(path)
    assert config.server_url == "https://samples.example.org"
    assert config.device_kind == "DRUMBOX"
    assert config.poll_interval == 0.5
    assert config.default_pack_ids == ["A", "", "B"]
    assert config.request_timeout == SyncConfig().request_timeout


def test_load_other_section(tmp_path):
    path = _write(tmp_path, "[bench]\ndevice_kind = BENCH\n")
    assert load_sync_config(path, section="bench").device_kind == "BENCH"
    with pytest.raises(ValueError, match="Missing section"):
        load_sync_config(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sync_config(tmp_path / "nope.ini")


@pytest.mark.parametrize(
    "body, msg",
    [
        ("poll_interval = fast", "must be a number"),
        ("request_timeout = 0", "must be positive"),
        ("default_pack_ids = " + ",".join("P%d" % i for i in range(11)), "1-10"),
        ("server_url =   ", "must not be empty"),
    ],
)
def test_validate_rejects(body, msg):
    config = ConfigParser()
    config.read_string("[sampsync]\n" + body + "\n")
    is_valid, err = validate_sync_config(config, "sampsync")
    assert not is_valid
    assert msg in err
