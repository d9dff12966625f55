"""Domain service base."""


class Service:
    """Marker base for domain services.

    Services take their repositories and collaborators in ``__init__`` and
    are built per request by the DI container.
    """
