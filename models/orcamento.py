from datetime import datetime

from sqlalchemy import JSON, Column, Date, DateTime, Float, Integer, String, Text

from config.database import Base


class Quote(Base):
    """
    Orçamento para o cliente.
    Os itens ficam em JSON: [{descricao, quantidade, valor_unitario, valor_total}].
    """

    __tablename__ = "orcamentos"

    id = Column(Integer, primary_key=True, index=True)
    cliente = Column(String(200), nullable=False)
    telefone = Column(String(30), nullable=True)
    email = Column(String(200), nullable=True)
    data = Column(Date, nullable=False)
    valor_total = Column(Float, nullable=False, default=0.0)
    status = Column(String(20), nullable=False, default="pendente")  # pendente / aprovado / recusado / em_producao / concluido
    observacoes = Column(Text, nullable=True)
    itens = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
