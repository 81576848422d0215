"""Tests for the CLI entry point."""

import os
import stat
import textwrap
from unittest.mock import patch

import pytest

from apnetcfg.cli.main import main

PRIVATE_PSK = "7190fee2e787b9d4d2ca4b4946d180e646727d9ca1d9adf664f84f85107de5fa"


@pytest.fixture(autouse=True)
def no_radio_tools():
    """No iw/ip on the test host: every lookup falls back."""
    with patch("apnetcfg.supplements.radio._run", return_value=None):
        yield


@pytest.fixture
def test_config(tmp_path, state_dir):
    """Create a config file pointing at temporary state and output paths."""
    config = tmp_path / "apnetcfg.toml"
    config.write_text(textwrap.dedent(f"""\
        [state]
        directory = "{state_dir}"

        [outputs]
        hostapd = "{tmp_path / 'out' / 'hostapd.conf'}"
        dnsmasq_dir = "{tmp_path / 'out' / 'dnsmasq.d'}"

        [services]
        reload = ["systemctl reload hostapd"]
    """))
    return config


def _outputs(tmp_path):
    out = tmp_path / "out"
    return out / "hostapd.conf", out / "dnsmasq.d"


class TestMainArgParsing:
    def test_no_command_shows_help(self, capsys):
        result = main([])
        assert result == 0
        assert "usage" in capsys.readouterr().out

    def test_missing_config(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(tmp_path / "missing.toml"), "info"])
        assert exc_info.value.code == 1
        assert "config file not found" in capsys.readouterr().err


class TestGenerate:
    def test_writes_all_files(self, test_config, tmp_path, capsys):
        result = main(["-c", str(test_config), "generate"])
        assert result == 0

        hostapd, dnsmasq_dir = _outputs(tmp_path)
        content = hostapd.read_text()
        assert "interface=wlan0\n" in content
        assert "ssid=example-SSID\n" in content
        assert f"wpa_psk={PRIVATE_PSK}\n" in content
        assert "bss=wlan1\nbssid=02:00:b0:0b:00:01\n" in content
        assert stat.S_IMODE(os.stat(hostapd).st_mode) == 0o600

        assert sorted(p.name for p in dnsmasq_dir.iterdir()) == ["private.conf", "public.conf"]
        public = (dnsmasq_dir / "public.conf").read_text()
        assert "dhcp-range=wlan1,10.43.0.10,10.43.255.250,24h\n" in public

        assert "Generated 3 config file(s)." in capsys.readouterr().out

    def test_stdout(self, test_config, tmp_path, capsys):
        result = main(["-c", str(test_config), "generate", "--stdout"])
        assert result == 0
        out = capsys.readouterr().out
        assert "# === hostapd ===" in out
        assert "# === dnsmasq: public ===" in out
        assert not (tmp_path / "out").exists()

    def test_no_enabled_networks(self, test_config, state_dir, tmp_path, capsys):
        (state_dir / "enabled").unlink()
        (state_dir / "guest" / "enabled").unlink()
        hostapd, _ = _outputs(tmp_path)
        hostapd.parent.mkdir()
        hostapd.write_text("stale\n")

        result = main(["-c", str(test_config), "generate"])
        assert result == 0
        assert hostapd.read_text() == "stale\n"
        assert "No enabled networks" in capsys.readouterr().err

    def test_only_public_enabled(self, test_config, state_dir, tmp_path):
        (state_dir / "enabled").unlink()
        assert main(["-c", str(test_config), "generate"]) == 0
        hostapd, dnsmasq_dir = _outputs(tmp_path)
        content = hostapd.read_text()
        assert "interface=wlan0\n" in content
        assert "ssid=example-SSID (public)\n" in content
        assert "bss=" not in content
        assert [p.name for p in dnsmasq_dir.iterdir()] == ["public.conf"]

    def test_validation_errors_block(self, test_config, state_dir, tmp_path, capsys):
        (state_dir / "channel").write_text("300\n")
        result = main(["-c", str(test_config), "generate"])
        assert result == 1
        assert "Use --force" in capsys.readouterr().err
        assert not (tmp_path / "out").exists()

    def test_force(self, test_config, state_dir, tmp_path):
        (state_dir / "channel").write_text("300\n")
        assert main(["-c", str(test_config), "generate", "--force"]) == 0
        hostapd, _ = _outputs(tmp_path)
        assert "channel=300\n" in hostapd.read_text()

    def test_invalid_channel_file(self, test_config, state_dir, capsys):
        (state_dir / "channel").write_text("auto\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(test_config), "generate"])
        assert exc_info.value.code == 1
        assert "reading channel failed" in capsys.readouterr().err

    def test_fixed_subnet_with_host_bits(self, test_config, tmp_path, capsys):
        with open(test_config, "a") as f:
            f.write('\n[networks.private]\nsubnet = "10.42.0.1/16"\n')
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(test_config), "generate"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "invalid config file" in err
        assert "[networks.private]" in err
        hostapd, _ = _outputs(tmp_path)
        assert not hostapd.exists()

    def test_fixed_interface_invalid(self, test_config, capsys):
        with open(test_config, "a") as f:
            f.write('\n[networks.private]\ninterface = "wlan/0"\n')
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(test_config), "validate"])
        assert exc_info.value.code == 1
        assert "invalid config file" in capsys.readouterr().err

    def test_write_failure_keeps_previous_files(
        self, test_config, state_dir, tmp_path, capsys,
    ):
        hostapd, dnsmasq_dir = _outputs(tmp_path)
        assert main(["-c", str(test_config), "generate"]) == 0
        before = {p: p.read_text() for p in [hostapd, *dnsmasq_dir.iterdir()]}
        (state_dir / "channel").write_text("6\n")
        real_replace = os.replace
        calls = []

        def replace(src, dst):
            calls.append(dst)
            if len(calls) == 2:
                raise OSError("read-only file system")
            return real_replace(src, dst)

        with patch("apnetcfg.utils.files.os.replace", replace):
            assert main(["-c", str(test_config), "generate"]) == 1

        assert "writing config files failed" in capsys.readouterr().err
        assert {p: p.read_text() for p in before} == before
        assert "channel=1\n" in hostapd.read_text()
        assert sorted(os.listdir(hostapd.parent)) == ["dnsmasq.d", "hostapd.conf"]
        assert sorted(os.listdir(dnsmasq_dir)) == ["private.conf", "public.conf"]

    @patch("apnetcfg.supplements.services.subprocess.run")
    def test_reload(self, mock_run, test_config):
        mock_run.return_value.returncode = 0
        assert main(["-c", str(test_config), "generate", "--reload"]) == 0
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == ["systemctl", "reload", "hostapd"]

    @patch("apnetcfg.supplements.services.subprocess.run")
    def test_reload_failure(self, mock_run, test_config, tmp_path):
        mock_run.return_value.returncode = 1
        mock_run.return_value.stderr = "failed"
        assert main(["-c", str(test_config), "generate", "--reload"]) == 1
        hostapd, _ = _outputs(tmp_path)
        assert hostapd.exists()

    @patch("apnetcfg.supplements.services.subprocess.run")
    def test_no_reload_by_default(self, mock_run, test_config):
        assert main(["-c", str(test_config), "generate"]) == 0
        mock_run.assert_not_called()


class TestValidate:
    def test_valid(self, test_config, capsys):
        result = main(["-c", str(test_config), "validate"])
        assert result == 0
        out = capsys.readouterr().out
        assert "Enabled:  2" in out
        assert "No violations found." in out

    def test_warnings_only(self, test_config, state_dir, capsys):
        (state_dir / "guest" / "password").unlink()
        assert main(["-c", str(test_config), "validate"]) == 0
        assert "No passphrase" in capsys.readouterr().out

    def test_errors(self, test_config, state_dir, capsys):
        (state_dir / "channel").write_text("0\n")
        with pytest.raises(SystemExit):
            main(["-c", str(test_config), "validate"])

    def test_channel_out_of_range(self, test_config, state_dir, capsys):
        (state_dir / "channel").write_text("197\n")
        assert main(["-c", str(test_config), "validate"]) == 1
        assert "Channel 197" in capsys.readouterr().out


class TestInfo:
    def test_info(self, test_config, state_dir, capsys):
        result = main(["-c", str(test_config), "info"])
        assert result == 0
        out = capsys.readouterr().out
        assert "Node:    example-SSID" in out
        assert "Channel: 1" in out
        assert "private: enabled, ssid='example-SSID'" in out
        assert "interface=wlan0 subnet=10.42.0.0/16" in out
        assert "interface=wlan1 subnet=10.43.0.0/16" in out
        assert "Radio:   phy0 (mac unknown)" in out

    def test_info_detected_interface(self, test_config, capsys):
        def fake_run(command, verbose=False):
            if command == ["iw", "dev"]:
                return "phy#0\n\tInterface wlp2s0\n"
            return None

        with patch("apnetcfg.supplements.radio._run", fake_run):
            assert main(["-c", str(test_config), "info"]) == 0
        out = capsys.readouterr().out
        assert "interface=wlp2s0 subnet=10.42.0.0/16" in out
        assert "interface=wlp2s1 subnet=10.43.0.0/16" in out


class TestPsk:
    def test_psk(self, capsys):
        assert main(["psk", "example-SSID", "foobarpassprivate"]) == 0
        assert capsys.readouterr().out.strip() == PRIVATE_PSK

    def test_psk_empty(self, capsys):
        assert main(["psk", "example-SSID", ""]) == 1
        assert "must not be empty" in capsys.readouterr().err
