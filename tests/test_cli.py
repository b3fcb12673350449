import pytest

from keylight_exporter.__main__ import build_parser, load_settings, main


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.chdir("/")
    for key in ("KEYLIGHT_FILE", "KEYLIGHT_DATASTORE", "KEYLIGHT_IPADDRESS"):
        monkeypatch.delenv(key, raising=False)


def test_flags_map_onto_settings():
    args = build_parser().parse_args(
        [
            "--timeout", "2.5",
            "--ipaddress", "192.168.1.50",
            "--port", "9000",
            "--metricport", "9200",
            "--interval", "5",
            "--pollurl", "elgato/lights/status",
            "--metricurl", "/prom",
            "--datastore", "/var/lib/keylight",
            "-v",
        ]
    )
    settings = load_settings(args)

    assert settings.timeout_seconds == 2.5
    assert settings.poll_url == "http://192.168.1.50:9000/elgato/lights/status"
    assert settings.metric_port == 9200
    assert settings.poll_interval_seconds == 5.0
    assert settings.metric_path == "/prom"
    assert settings.datastore == "/var/lib/keylight"
    assert settings.log_level == "DEBUG"


def test_unset_flags_fall_back_to_environment(monkeypatch):
    monkeypatch.setenv("KEYLIGHT_IPADDRESS", "10.1.1.1")
    settings = load_settings(build_parser().parse_args([]))

    assert settings.ipaddress == "10.1.1.1"
    assert settings.port == 9123
    assert settings.poll_interval_seconds == 10.0
    assert settings.datastore is None


def test_file_mode_prints_metrics(tmp_path, good_body, capsys):
    payload = tmp_path / "lights.json"
    payload.write_bytes(good_body)

    assert main(["--file", str(payload)]) == 0

    out = capsys.readouterr().out
    assert "elgato_keylight_onoff 1.0" in out
    assert "elgato_keylight_brightness 55.0" in out
    assert "elgato_keylight_temperature 198.0" in out


def test_file_mode_missing_file_fails(tmp_path):
    assert main(["--file", str(tmp_path / "nope.json")]) == 1


def test_file_mode_bad_payload_fails(tmp_path):
    payload = tmp_path / "lights.json"
    payload.write_text('{"numberOfLights":0,"lights":[]}')
    assert main(["--file", str(payload)]) == 1


def test_invalid_configuration_exits_non_zero():
    assert main(["--interval", "0"]) == 2


def test_bad_log_level_from_environment_exits_non_zero(monkeypatch):
    monkeypatch.setenv("KEYLIGHT_LOG_LEVEL", "LOUD")
    assert main([]) == 2
