import json

import pytest

from funcbridge.cli import cli, decode_file
from funcbridge.core.exceptions import TriggerPayloadMalformedError, TriggerRegistryError
from funcbridge.triggers.timer import TimerTrigger

from conftest import http_envelope, timer_envelope


@pytest.fixture
def timer_file(tmp_path):
    path = tmp_path / "timer.json"
    path.write_text(json.dumps(timer_envelope(is_past_due=True)))
    return path


def test_decode_file(timer_file):
    trigger = decode_file("timer", str(timer_file))

    assert isinstance(trigger, TimerTrigger)
    assert trigger.is_past_due is True


def test_decode_file_with_binding_name(tmp_path):
    document = http_envelope(body="hi")
    document["Data"] = {"request": document["Data"]["req"]}
    path = tmp_path / "http.json"
    path.write_text(json.dumps(document))

    assert decode_file("http", str(path), name="request").data() == b"hi"


def test_decode_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        decode_file("timer", str(tmp_path / "nope.json"))


def test_decode_file_errors(tmp_path, timer_file):
    bad = tmp_path / "bad.json"
    bad.write_text('{"Data": ')

    with pytest.raises(TriggerPayloadMalformedError):
        decode_file("timer", str(bad))
    with pytest.raises(TriggerRegistryError):
        decode_file("eventgrid", str(timer_file))


def test_cli_validate_ok(timer_file):
    with pytest.raises(SystemExit) as exc:
        cli(["validate", "timer", str(timer_file)])

    assert exc.value.code == 0


def test_cli_validate_malformed(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("not-json")

    with pytest.raises(SystemExit) as exc:
        cli(["validate", "http", str(bad)])

    assert exc.value.code == 1


def test_cli_decode_prints_trigger(timer_file, capsys):
    with pytest.raises(SystemExit) as exc:
        cli(["decode", "timer", str(timer_file)])

    assert exc.value.code == 0
    assert '"is_past_due": true' in capsys.readouterr().out


def test_cli_without_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        cli([])

    assert exc.value.code == 0
    assert "funcbridge" in capsys.readouterr().out
