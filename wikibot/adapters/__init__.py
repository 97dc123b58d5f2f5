"""Adapters for the transport, parser and HTTP surface."""
