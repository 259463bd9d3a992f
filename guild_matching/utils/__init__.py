"""Shared constants, rank helpers and record cleaning."""
