"""Utility helpers used across inetgen.

This package contains small, self-contained utilities that do not depend on
project internals. Keep modules minimal and focused.
"""
