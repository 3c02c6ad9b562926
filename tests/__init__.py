"""Tests for the smart_tasks package."""
