"""Elektryk Pomocnik - schematic symbol engine and editor components."""
