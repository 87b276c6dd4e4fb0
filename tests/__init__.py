"""Tests for the Samanage client."""
