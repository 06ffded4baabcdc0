"""Read and write services for the vessel bounded context."""
