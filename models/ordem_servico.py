from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text

from config.database import Base


class WorkOrder(Base):
    """
    Ordem de serviço acompanhada pelo quadro (kanban) de produção.
    """

    __tablename__ = "ordens_servico"

    id = Column(Integer, primary_key=True, index=True)
    cliente = Column(String(200), nullable=False)
    telefone = Column(String(30), nullable=True)
    email = Column(String(200), nullable=True)
    produto = Column(String(200), nullable=False)
    data_entrada = Column(Date, nullable=True)
    data_entrega = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="em_aberto")
    valor = Column(Float, nullable=False, default=0.0)
    observacoes = Column(Text, nullable=True)
    endereco_entrega = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
