"""Ambience Sanctum backend."""
