"""Workout customization conflict detection."""
