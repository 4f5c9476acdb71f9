"""Shared constants for ddsreg CLI commands."""

# Process exit codes
EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_MALFORMED = 2

KIND_CHOICES = ["clsid", "iid", "libid", "guid"]
