"""Tests for the Nature Remo sensor integration."""
