from .base import UserStore
from .document import DocumentUserStore
from .relational import RelationalUserStore
from .selector import initialize

__all__ = ["UserStore", "DocumentUserStore", "RelationalUserStore", "initialize"]
