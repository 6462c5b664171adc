"""Packaged saturation tables for custom refrigerant blends."""
