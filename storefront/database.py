from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .config import get_settings

settings = get_settings()

connect_args = {}
if settings.database_url.startswith("sqlite"):
    # sqlite connections are handed between the threadpool workers
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.database_url, connect_args=connect_args, pool_pre_ping=True)    # Pooled connections, one checkout per request
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)   # A unit of work bound to one request

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
