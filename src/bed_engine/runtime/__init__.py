"""Telemetry, settings and prompt history shared by the editor."""
