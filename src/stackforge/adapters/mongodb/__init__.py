"""MongoDB adapter — circuit-breaker guarded data access over motor collections."""

from stackforge.adapters.mongodb.client import connect_database
from stackforge.adapters.mongodb.safe import STORE_BREAKER_POLICY, ResilientDataAccess

__all__ = ["STORE_BREAKER_POLICY", "ResilientDataAccess", "connect_database"]
