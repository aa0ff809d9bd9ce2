"""Infrastructure providers.

Both variants of a swappable component must be imported here so that
``PersistenceProvider.__subclasses__()`` sees the production one.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = ["PersistenceProvider", "ProdPersistenceProvider"]
