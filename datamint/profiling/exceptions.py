class ProfilingError(Exception):
    """Raised when profiling is requested for a dataset that failed validation."""
