"""All bizadmin database models.

Import all models here so SQLAlchemy can discover them.
"""

from bizadmin.models.base import Base, ResourceModel  # noqa: F401
from bizadmin.models.estimate import Estimate  # noqa: F401
from bizadmin.models.product import Product  # noqa: F401
from bizadmin.models.user import User  # noqa: F401
