"""Base class for domain services."""


class Service:
    """Base class for all domain services.

    A domain service holds rules that span several entities, such as
    keeping the category tree acyclic or checking that a reply's parent
    lives on the same post.
    """

    pass
