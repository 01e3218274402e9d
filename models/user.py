from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from config.database import Base


class User(Base):
    """
    Usuários do painel.
    Perfis suportados (role):
    - admin
    - gerente
    - funcionario
    """

    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(200), unique=True, nullable=False, index=True)
    nome = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="funcionario")
    ativo = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
