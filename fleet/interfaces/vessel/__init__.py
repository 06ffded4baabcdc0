"""HTTP interface for the vessel bounded context."""
