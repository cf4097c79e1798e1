"""HTTP API for the livestock marketplace."""
