from sqlalchemy.orm import declarative_base

Base = declarative_base()

from .signup import Signup as Signup  # noqa: E402
from .admin_credential import AdminCredential as AdminCredential  # noqa: E402
