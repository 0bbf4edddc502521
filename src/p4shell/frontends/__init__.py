"""User interfaces for p4shell (CLI and interactive shell)."""
