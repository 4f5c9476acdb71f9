"""Lookup and validation over MSDDS and Microsoft Data Tools COM identifiers."""
