"""Command-line entry points.

- ``auto-minutes`` / ``python -m auto_minutes.cli`` -- collect, assemble,
  run, publish and status subcommands (``minutes.py``).
- ``factories.py`` -- builds the concrete providers from Settings.
"""
