"""Utility helpers shared by the Samanage client."""
