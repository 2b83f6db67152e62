"""Clients and stores used by the screens."""
