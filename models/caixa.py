from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text

from config.database import Base


class CashRegister(Base):
    """
    Caixa (abertura/fechamento).
    Apenas um caixa com status 'aberto' deve existir por vez.
    """

    __tablename__ = "caixa"

    id = Column(Integer, primary_key=True, index=True)
    data = Column(Date, nullable=False, index=True)
    hora_abertura = Column(String(5), nullable=False)
    hora_fechamento = Column(String(5), nullable=True)
    valor_inicial = Column(Float, nullable=False, default=0.0)
    status = Column(String(20), nullable=False, default="aberto", index=True)  # aberto / fechado
    valor_final = Column(Float, nullable=True)
    valor_sistema = Column(Float, nullable=True)
    diferenca = Column(Float, nullable=True)
    observacoes_abertura = Column(Text, nullable=True)
    observacoes_fechamento = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class CashMovement(Base):
    """
    Entrada ou saída de dinheiro vinculada a um caixa aberto.
    Não é alterada nem removida depois de registrada.
    """

    __tablename__ = "caixa_movimentacoes"

    id = Column(Integer, primary_key=True, index=True)
    caixa_id = Column(Integer, ForeignKey("caixa.id"), nullable=False, index=True)
    data = Column(Date, nullable=False, index=True)
    hora = Column(String(5), nullable=False)
    tipo = Column(String(10), nullable=False)  # entrada / saida
    valor = Column(Float, nullable=False)
    descricao = Column(String(255), nullable=False)
    forma_pagamento = Column(String(20), nullable=False)
    observacoes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class CashClosing(Base):
    """
    Histórico de fechamentos (somente inclusão).
    """

    __tablename__ = "caixa_fechamentos"

    id = Column(Integer, primary_key=True, index=True)
    data = Column(Date, nullable=False, index=True)
    hora_abertura = Column(String(5), nullable=False)
    hora_fechamento = Column(String(5), nullable=False)
    valor_inicial = Column(Float, nullable=False)
    valor_final = Column(Float, nullable=False)
    valor_sistema = Column(Float, nullable=False)
    diferenca = Column(Float, nullable=False)
    total_entradas = Column(Float, nullable=False, default=0.0)
    total_saidas = Column(Float, nullable=False, default=0.0)
    observacoes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
