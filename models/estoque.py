"""
Estoque da vidraçaria: chapas, perfis e acessórios, com o registro de cada movimentação.
"""
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text

from config.database import Base


class StockItem(Base):
    """
    Produto em estoque (ex.: vidro temperado 8mm, perfil de alumínio).
    """

    __tablename__ = "estoque"

    id = Column(Integer, primary_key=True, index=True)
    codigo = Column(String(50), unique=True, nullable=False, index=True)
    nome = Column(String(200), nullable=False)
    descricao = Column(Text, nullable=True)
    quantidade = Column(Float, nullable=False, default=0.0)
    quantidade_minima = Column(Float, nullable=False, default=0.0)
    unidade = Column(String(20), nullable=False)  # chapa, barra, unidade, m²...
    valor_unitario = Column(Float, nullable=False, default=0.0)
    fornecedor = Column(String(200), nullable=True)
    localizacao = Column(String(100), nullable=True)
    ultima_entrada = Column(Date, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )


class StockMovement(Base):
    """
    Entrada ou saída de um produto do estoque.
    """

    __tablename__ = "estoque_movimentacoes"

    id = Column(Integer, primary_key=True, index=True)
    produto_id = Column(Integer, ForeignKey("estoque.id"), nullable=False, index=True)
    produto_nome = Column(String(200), nullable=True)
    tipo = Column(String(10), nullable=False)  # entrada / saida
    quantidade = Column(Float, nullable=False)
    data = Column(Date, nullable=False, index=True)
    motivo = Column(String(50), nullable=False)  # compra, venda, ajuste, perda...
    observacoes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
