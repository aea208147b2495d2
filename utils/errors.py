#!/usr/bin/env python3
"""Typed errors shared by the release pipeline."""

from __future__ import annotations


class ReleaseError(Exception):
    """Base error for release failures, carrying a typed code for friendly handling."""
    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        super().__init__(message)
        self.code = code
