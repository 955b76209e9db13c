from sqlalchemy import Column, JSON, String
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from core.config import settings


class Base(DeclarativeBase):
    pass


class Document(Base):
    """One keyed document inside a named collection.
    The key is never repeated inside `data`."""
    __tablename__ = "documents"

    collection = Column(String, primary_key=True)
    key = Column(String, primary_key=True)
    data = Column(JSON, nullable=False, default=dict)


engine = create_async_engine(settings.database_url, echo=settings.database_echo)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def create_db_and_tables(bind=None):
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
