"""Importable sample package used by the environment adapter tests."""
