"""
Database models for the SkillTree taxonomy and research provenance.
Uses SQLite with SQLAlchemy by default; any SQLAlchemy URL works.
"""

from datetime import datetime
from sqlalchemy import (
    create_engine, Column, Integer, String, Text, Float, Boolean, Date, DateTime,
    ForeignKey, Index, Enum,
)
from sqlalchemy.orm import declarative_base, sessionmaker, relationship
from sqlalchemy.pool import QueuePool

from ..models.content import SourceType, AIAgentType

Base = declarative_base()


class Source(Base):
    """An external reference used as research input. Shared across domains."""
    __tablename__ = 'sources'
    __table_args__ = (
        Index('idx_source_type', 'source_type'),
    )

    id = Column(Integer, primary_key=True)
    title = Column(String(500), nullable=False)
    url = Column(Text, nullable=False, unique=True)  # business key, upsert target
    source_type = Column(Enum(SourceType, native_enum=False, length=50), nullable=False)

    summary = Column(Text)
    authors = Column(Text)
    publication_date = Column(Date)
    relevance_score = Column(Float)
    excerpt = Column(Text)
    extra_metadata = Column('metadata', Text)  # opaque JSON

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    domain_links = relationship('DomainSource', back_populates='source')

    def __repr__(self):
        return f"<Source id={self.id} url={self.url!r}>"


class Domain(Base):
    """Root taxonomy node created by a generation run."""
    __tablename__ = 'domains'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500))
    prompt = Column(Text)  # truncated AI response kept for audit

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    categories = relationship('Category', back_populates='domain', cascade='all, delete-orphan')
    sources = relationship(
        'DomainSource', back_populates='domain', cascade='all, delete-orphan', order_by='DomainSource.id'
    )

    def __repr__(self):
        return f"<Domain id={self.id} name={self.name!r}>"


class Category(Base):
    """First level under a domain."""
    __tablename__ = 'categories'
    __table_args__ = (
        Index('idx_category_domain', 'domain_id'),
    )

    id = Column(Integer, primary_key=True)
    domain_id = Column(Integer, ForeignKey('domains.id'), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)

    domain = relationship('Domain', back_populates='categories')


class DomainSource(Base):
    """Provenance link: a Source contributed to a Domain's generation."""
    __tablename__ = 'domain_sources'
    __table_args__ = (
        Index('idx_domain_source_domain', 'domain_id'),
        Index('idx_domain_source_source', 'source_id'),
    )

    id = Column(Integer, primary_key=True)
    domain_id = Column(Integer, ForeignKey('domains.id'), nullable=False)
    source_id = Column(Integer, ForeignKey('sources.id'), nullable=False)

    relevance_score = Column(Float, nullable=False)  # 0.0 - 1.0
    relevant_excerpt = Column(Text)
    used_for_generation = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    domain = relationship('Domain', back_populates='sources')
    source = relationship('Source', back_populates='domain_links')


class AIAgentConfig(Base):
    """Per-vendor configuration looked up by agent type on every call."""
    __tablename__ = 'ai_agent_configs'

    id = Column(Integer, primary_key=True)
    agent_type = Column(Enum(AIAgentType, native_enum=False, length=20), nullable=False, unique=True)

    api_endpoint = Column(String(500), nullable=False)
    default_model = Column(String(100), nullable=False)
    system_prompt = Column(Text)

    active = Column(Boolean, default=True, nullable=False)
    encrypted_credentials = Column(String(1000))

    max_tokens = Column(Integer, default=4096, nullable=False)
    temperature = Column(Float, default=0.7, nullable=False)
    rate_limit = Column(Integer, default=60, nullable=False)  # requests per minute

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# Database initialization
def init_db(database_url: str = 'sqlite:///skilltree.db'):
    """Initialize the database, creating tables if needed."""
    if database_url.startswith('sqlite'):
        engine = create_engine(
            database_url,
            echo=False,
            poolclass=QueuePool,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,  # Recycle connections after 30 minutes
            connect_args={'check_same_thread': False}  # Required for SQLite with threading
        )
    else:
        engine = create_engine(database_url, echo=False, pool_pre_ping=True)
    Base.metadata.create_all(engine)
    return engine


def get_session_factory(engine):
    """
    Session factory shared by the services.
    Objects stay readable after commit so results can cross service boundaries.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)
