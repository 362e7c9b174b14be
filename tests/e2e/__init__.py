"""End-to-end tests.

Purpose
- Drive the installed CLI entry point the way a user would.

Guidelines
- Invoke through CliRunner inside an isolated filesystem.
- Assert on exit codes and on what lands in stdout vs. stderr.
"""
