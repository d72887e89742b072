# gastos/infrastructure/persistence/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

import config

# La URL apunta a PostgreSQL en producción; en local cae a un archivo SQLite.
DATABASE_URL = config.DATABASE_URL
if not DATABASE_URL:
    raise ValueError("No se ha definido DATABASE_URL en el archivo .env")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependencia de FastAPI: una sesión por request, siempre cerrada al final."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    from gastos.infrastructure.persistence import models  # noqa: F401  registra las tablas
    Base.metadata.create_all(bind=engine)
