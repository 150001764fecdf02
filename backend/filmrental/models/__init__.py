"""ORM Models — SQLAlchemy declarative models for all rental entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Rental is the join point of Customer, Inventory and Staff; Payment references one Rental

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from filmrental.models.store import Store  # noqa: F401
from filmrental.models.film import Film  # noqa: F401
from filmrental.models.inventory import Inventory  # noqa: F401
from filmrental.models.customer import Customer  # noqa: F401
from filmrental.models.staff import Staff  # noqa: F401
from filmrental.models.rental import Rental  # noqa: F401
from filmrental.models.payment import Payment  # noqa: F401
