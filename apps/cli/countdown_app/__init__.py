"""Countdown command-line application."""
