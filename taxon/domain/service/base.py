"""Domain service base."""


class Service:
    """Marker base for taxonomy domain services.

    A service owns one concern of the taxonomy (hierarchy, merging,
    following, ...) and works only through repository interfaces.
    """
