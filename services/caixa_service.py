"""
Ciclo de vida do caixa: abertura, movimentações, saldo atual e fechamento com conferência.

Regras:
- Só pode existir um caixa com status 'aberto' por vez.
- Movimentações só podem ser registradas com o caixa aberto e não são alteradas depois.
- No fechamento: valor_sistema = valor_inicial + entradas - saídas
  e diferenca = valor_final - valor_sistema (negativa = falta, positiva = sobra).
- O estado em memória só muda depois que o banco confirmou todas as gravações.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from schemas.base import parse_input
from schemas.caixa import AberturaCaixa, FechamentoCaixa, MovimentacaoCaixa
from services.data_service import Filter, TableStore
from services.errors import InvalidStateError, PersistenceFailure
from utils.money import sum_values, to_decimal, to_float

logger = logging.getLogger(__name__)

CAIXA = "caixa"
MOVIMENTACOES = "caixa_movimentacoes"
FECHAMENTOS = "caixa_fechamentos"

STATUS_ABERTO = "aberto"
STATUS_FECHADO = "fechado"


@dataclass
class CaixaState:
    """Caixa aberto (se houver) e suas movimentações."""

    caixa: Optional[dict] = None
    movimentacoes: List[dict] = field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.caixa is not None


def compute_totals(movimentacoes: List[dict]) -> Tuple[Decimal, Decimal]:
    """Total de entradas e de saídas."""
    entradas = sum_values(m for m in movimentacoes if m.get("tipo") == "entrada")
    saidas = sum_values(m for m in movimentacoes if m.get("tipo") == "saida")
    return entradas, saidas


def compute_balance(caixa: Optional[dict], movimentacoes: List[dict]) -> Decimal:
    """valor_inicial + entradas - saídas; zero sem caixa aberto."""
    if caixa is None:
        return Decimal("0")
    entradas, saidas = compute_totals(movimentacoes)
    return to_decimal(caixa.get("valor_inicial")) + entradas - saidas


class CashRegisterService:
    """
    Opera o caixa sobre um repositório de tabelas.
    O estado (CaixaState) é recebido de fora, um por sessão de usuário.
    """

    def __init__(
        self,
        store: TableStore,
        state: Optional[CaixaState] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.state = state if state is not None else CaixaState()
        self.clock = clock

    # ----- Consultas -----

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    def load(self) -> CaixaState:
        """Recarrega do banco o caixa aberto e suas movimentações."""
        abertos = self.store.fetch_all(
            CAIXA, filters=[Filter("status", "eq", STATUS_ABERTO)], order_by="id"
        )
        if len(abertos) > 1:
            logger.warning("Há %d caixas abertos; usando o mais recente.", len(abertos))
        caixa = abertos[0] if abertos else None
        movimentacoes = []
        if caixa:
            movimentacoes = self.store.fetch_all(
                MOVIMENTACOES, filters=[Filter("caixa_id", "eq", caixa["id"])]
            )
        self.state.caixa = caixa
        self.state.movimentacoes = movimentacoes
        return self.state

    def compute_current_balance(self) -> Decimal:
        return compute_balance(self.state.caixa, self.state.movimentacoes)

    def totals(self) -> Tuple[Decimal, Decimal]:
        return compute_totals(self.state.movimentacoes)

    def sorted_movements(self) -> List[dict]:
        """Movimentações do caixa aberto por hora (crescente)."""
        return sorted(self.state.movimentacoes, key=lambda m: m.get("hora") or "")

    def today_hora(self) -> Tuple[date, str]:
        """Data e hora (HH:MM) atuais, valores padrão do formulário de abertura."""
        agora = self.clock()
        return agora.date(), agora.strftime("%H:%M")

    def closing_history(self, limit: Optional[int] = None) -> List[dict]:
        """Histórico de fechamentos, do mais recente para o mais antigo."""
        return self.store.fetch_all(
            FECHAMENTOS, limit=limit, order_by="data", order_direction="desc"
        )

    # ----- Transições -----

    def open_register(self, data, hora: str, valor_inicial, observacoes: Optional[str] = None) -> dict:
        dados = parse_input(
            AberturaCaixa, data=data, hora=hora, valor_inicial=valor_inicial, observacoes=observacoes
        )
        if self.state.is_open:
            raise InvalidStateError("Já existe um caixa aberto. Feche-o antes de abrir outro.")
        if self.store.fetch_all(CAIXA, filters=[Filter("status", "eq", STATUS_ABERTO)], limit=1):
            raise InvalidStateError("Já existe um caixa aberto. Feche-o antes de abrir outro.")

        novo = self.store.insert(
            CAIXA,
            {
                "data": dados.data.isoformat(),
                "hora_abertura": dados.hora,
                "valor_inicial": to_float(dados.valor_inicial),
                "status": STATUS_ABERTO,
                "observacoes_abertura": dados.observacoes or None,
                "hora_fechamento": None,
                "valor_final": None,
                "valor_sistema": None,
                "diferenca": None,
                "observacoes_fechamento": None,
            },
        )[0]
        logger.info("Caixa %s aberto em %s %s com %s", novo["id"], novo["data"], dados.hora, dados.valor_inicial)
        self.state.caixa = novo
        self.state.movimentacoes = []
        return novo

    def register_movement(
        self,
        tipo: str,
        valor,
        descricao: str,
        forma_pagamento: str,
        observacoes: Optional[str] = None,
    ) -> dict:
        dados = parse_input(
            MovimentacaoCaixa,
            tipo=tipo,
            valor=valor,
            descricao=descricao,
            forma_pagamento=forma_pagamento,
            observacoes=observacoes,
        )
        if not self.state.is_open:
            raise InvalidStateError("Nenhum caixa aberto para registrar movimentação.")

        agora = self.clock()
        movimentacao = self.store.insert(
            MOVIMENTACOES,
            {
                "caixa_id": self.state.caixa["id"],
                "data": agora.date().isoformat(),
                "hora": agora.strftime("%H:%M"),
                "tipo": dados.tipo,
                "valor": to_float(dados.valor),
                "descricao": dados.descricao,
                "forma_pagamento": dados.forma_pagamento,
                "observacoes": dados.observacoes or None,
            },
        )[0]
        self.state.movimentacoes = self.state.movimentacoes + [movimentacao]
        return movimentacao

    def close_register(self, valor_final, observacoes: Optional[str] = None) -> dict:
        """
        Fecha o caixa aberto e grava o resumo no histórico de fechamentos.
        Retorna o registro de fechamento.
        """
        dados = parse_input(FechamentoCaixa, valor_final=valor_final, observacoes=observacoes)
        if not self.state.is_open:
            raise InvalidStateError("Nenhum caixa aberto para fechar.")

        caixa = self.state.caixa
        entradas, saidas = self.totals()
        valor_sistema = to_decimal(caixa.get("valor_inicial")) + entradas - saidas
        diferenca = dados.valor_final - valor_sistema
        hora_fechamento = self.clock().strftime("%H:%M")

        self.store.update(
            CAIXA,
            caixa["id"],
            {
                "status": STATUS_FECHADO,
                "hora_fechamento": hora_fechamento,
                "valor_final": to_float(dados.valor_final),
                "valor_sistema": to_float(valor_sistema),
                "diferenca": to_float(diferenca),
                "observacoes_fechamento": dados.observacoes or None,
            },
        )
        try:
            fechamento = self.store.insert(
                FECHAMENTOS,
                {
                    "data": caixa["data"],
                    "hora_abertura": caixa["hora_abertura"],
                    "hora_fechamento": hora_fechamento,
                    "valor_inicial": to_float(caixa.get("valor_inicial")),
                    "valor_final": to_float(dados.valor_final),
                    "valor_sistema": to_float(valor_sistema),
                    "diferenca": to_float(diferenca),
                    "total_entradas": to_float(entradas),
                    "total_saidas": to_float(saidas),
                    "observacoes": dados.observacoes or None,
                },
            )[0]
        except PersistenceFailure:
            self._reopen(caixa)
            raise

        logger.info(
            "Caixa %s fechado: sistema %s, contado %s, diferença %s",
            caixa["id"], valor_sistema, dados.valor_final, diferenca,
        )
        self.state.caixa = None
        self.state.movimentacoes = []
        return fechamento

    def _reopen(self, caixa: dict) -> None:
        """Desfaz o fechamento quando o histórico não pôde ser gravado."""
        try:
            self.store.update(
                CAIXA,
                caixa["id"],
                {
                    "status": STATUS_ABERTO,
                    "hora_fechamento": None,
                    "valor_final": None,
                    "valor_sistema": None,
                    "diferenca": None,
                    "observacoes_fechamento": None,
                },
            )
        except PersistenceFailure:
            logger.error(
                "Caixa %s ficou fechado sem registro no histórico; reabra manualmente.", caixa["id"]
            )
