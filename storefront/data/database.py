# storefront/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL

engine = create_engine(DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    #import modeli zeby zarejestrowac je w Base.metadata przed create_all
    import storefront.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    return list(Base.metadata.tables.keys())
