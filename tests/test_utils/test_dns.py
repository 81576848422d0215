"""Tests for config value helpers."""

import pytest

from apnetcfg.utils.dns import dns_label, is_safe_dns_name, is_single_line


class TestIsSafeDnsName:
    @pytest.mark.parametrize("name", ["ap", "ap.local", "my-box", "box_2"])
    def test_safe(self, name):
        assert is_safe_dns_name(name)

    @pytest.mark.parametrize("name", ["", "my box", "a/b", "box\n", "ap;rm"])
    def test_unsafe(self, name):
        assert not is_safe_dns_name(name)


class TestDnsLabel:
    def test_first_label_lowercased(self):
        assert dns_label("AP7.Example.COM") == "ap7"

    def test_invalid_characters_collapsed(self):
        assert dns_label("Café  Box!") == "caf-box"

    def test_nothing_left(self):
        assert dns_label("(((") == ""


class TestIsSingleLine:
    def test_plain(self):
        assert is_single_line("example-SSID (public)")

    @pytest.mark.parametrize("value", ["a\nb", "a\rb", "a\x00b"])
    def test_line_breaks(self, value):
        assert not is_single_line(value)
