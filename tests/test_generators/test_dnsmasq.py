"""Tests for the dnsmasq configuration generator."""

import ipaddress

import pytest

from apnetcfg.config import DnsmasqConfig
from apnetcfg.derivations.subnets import dhcp_layout
from apnetcfg.generators.dnsmasq import (
    FALLBACK_ADDRESS_NAME,
    address_names,
    generate_dnsmasq,
    render_dnsmasq,
)
from apnetcfg.models.network import InterfaceName, Network


def _assigned(name, subnet, interface):
    return Network(
        name=name,
        ssid=name,
        passphrase="long-enough",
        enabled=True,
        subnet=ipaddress.IPv4Network(subnet),
        interface=InterfaceName(interface),
    )


@pytest.fixture
def networks():
    return [
        _assigned("private", "10.42.0.0/16", "wlan0"),
        _assigned("public", "10.43.0.0/16", "wlan1"),
    ]


class TestAddressNames:
    def test_node_name(self):
        assert address_names("example-SSID", []) == ["example-ssid"]

    def test_aliases_first(self):
        assert address_names("box", ["ap.local", "setup"]) == ["ap.local", "setup", "box"]

    def test_duplicates_dropped(self):
        assert address_names("box", ["box"]) == ["box"]

    def test_unsafe_aliases_dropped(self):
        assert address_names("box", ["bad name", "ok"]) == ["ok", "box"]

    def test_fallback(self):
        assert address_names("...", []) == [FALLBACK_ADDRESS_NAME]


class TestGenerateDnsmasq:
    def test_one_file_per_network(self, networks):
        files = generate_dnsmasq(networks, "box", DnsmasqConfig())
        assert list(files) == ["private", "public"]

    def test_full_document(self, networks):
        files = generate_dnsmasq(networks, "example-SSID", DnsmasqConfig(aliases=["ap"]))
        assert files["private"] == (
            "# dnsmasq configuration for the private network\n"
            "\n"
            "interface=wlan0\n"
            "\n"
            "address=/ap/10.42.0.1\n"
            "address=/example-ssid/10.42.0.1\n"
            "\n"
            "dhcp-range=wlan0,10.42.0.10,10.42.255.250,24h\n"
            "\n"
            "# Gateway\n"
            "dhcp-option=3,10.42.0.1\n"
            "\n"
            "# DNS\n"
            "dhcp-option=6,10.42.0.1\n"
            "\n"
            "# IP Forward (no)\n"
            "dhcp-option=19,0\n"
            "\n"
            "# Source Routing\n"
            "dhcp-option=20,0\n"
            "\n"
            "# 44-47 NetBIOS\n"
            "dhcp-option=44,0.0.0.0\n"
            "dhcp-option=45,0.0.0.0\n"
            "dhcp-option=46,8\n"
            "dhcp-option=47\n"
            "\n"
            "dhcp-authoritative\n"
            "\n"
            "bind-interfaces\n"
            "except-interface=lo\n"
        )

    def test_second_network_uses_its_own_subnet(self, networks):
        files = generate_dnsmasq(networks, "box", DnsmasqConfig())
        public = files["public"]
        assert "interface=wlan1\n" in public
        assert "dhcp-range=wlan1,10.43.0.10,10.43.255.250,24h\n" in public
        assert "dhcp-option=3,10.43.0.1\n" in public
        assert "address=/box/10.43.0.1\n" in public
        assert "10.42." not in public

    def test_lease_and_reservations(self, networks):
        config = DnsmasqConfig(lease_time="12h", reserved_head=20, reserved_tail=1)
        files = generate_dnsmasq(networks, "box", config)
        assert "dhcp-range=wlan0,10.42.0.22,10.42.255.254,12h\n" in files["private"]

    def test_no_networks(self):
        assert generate_dnsmasq([], "box", DnsmasqConfig()) == {}

    def test_unassigned_subnet_rejected(self):
        network = Network(name="private", ssid="box", enabled=True)
        with pytest.raises(ValueError, match="no subnet"):
            generate_dnsmasq([network], "box", DnsmasqConfig())


class TestRenderDnsmasq:
    def test_unassigned_interface_rejected(self):
        subnet = ipaddress.IPv4Network("10.42.0.0/16")
        network = Network(name="private", ssid="box", enabled=True, subnet=subnet)
        with pytest.raises(ValueError, match="no interface"):
            render_dnsmasq(network, dhcp_layout(subnet), ["box"], "24h")
