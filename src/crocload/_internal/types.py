"""Shared type aliases for crocload."""

from __future__ import annotations

# HTTP headers dictionary.
Headers = dict[str, str]

# Metric tags attached to every request (endpoint, method).
Tags = dict[str, str]

# Server-assigned crocodile identifier.
ResourceId = int | str
