from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from fintrack.config import DATABASE_URL

Base = declarative_base()
engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
