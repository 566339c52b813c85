from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from stockroom.database.engine import engine


def create_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=bind,
    )


SessionLocal = create_session_factory(engine)
