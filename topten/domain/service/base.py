"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business rules that span entities or need
    repositories; they never touch HTTP or cookies.
    """

    pass
