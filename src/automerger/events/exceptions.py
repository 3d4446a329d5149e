"""Exceptions for the events module."""


class EventError(Exception):
    """Event payload is missing fields its kind requires."""
