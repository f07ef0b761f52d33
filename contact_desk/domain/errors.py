class StoreError(Exception):
    """Raised by storage adapters when the backing store fails.

    Components turn this into an ``upstream_failure`` result instead of
    letting the backend's own exception types leak upward.
    """
