"""Command line helpers for Prompt Partner."""
