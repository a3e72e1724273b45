"""Snapshot and release orchestration."""
