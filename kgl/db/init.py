from sqlalchemy.engine import Engine

from kgl.db.session import Base
from kgl.models.user import User  # noqa: F401
from kgl.models.procurement import Procurement  # noqa: F401
from kgl.models.sale import Sale  # noqa: F401


def init_db(engine: Engine):
    # Create all tables
    Base.metadata.create_all(bind=engine)
