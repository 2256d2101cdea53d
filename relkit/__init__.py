"""relkit: release readiness checks and version management for project builds."""

__version__ = "0.1.0"
