"""Generators: hostapd and dnsmasq configuration documents."""
