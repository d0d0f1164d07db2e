"""Offline scripts."""
