from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text

from config.database import Base


class FinancialEntry(Base):
    """
    Lançamento financeiro (entrada ou saída) por categoria.
    """

    __tablename__ = "financas"

    id = Column(Integer, primary_key=True, index=True)
    data = Column(Date, nullable=False, index=True)
    tipo = Column(String(10), nullable=False)  # entrada / saida
    categoria = Column(String(100), nullable=False)
    descricao = Column(String(255), nullable=False)
    valor = Column(Float, nullable=False)
    observacoes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
