"""
Helpers para deixar as telas mais intuitivas e consistentes.
"""
import streamlit as st

from services.errors import ServiceError

_CORES = {
    "success": ("#e8f5e9", "#43a047", "✅"),
    "warning": ("#fff3e0", "#fb8c00", "⚠️"),
    "danger": ("#ffebee", "#e53935", "❗"),
}


def _box(kind: str, message: str) -> None:
    fundo, borda, icone = _CORES[kind]
    st.markdown(
        f"""
    <div style="
        background-color: {fundo};
        border-left: 4px solid {borda};
        padding: 14px 18px;
        margin: 12px 0;
        border-radius: 0 8px 8px 0;
        font-weight: 500;
    ">
        {icone} {message}
    </div>
    """,
        unsafe_allow_html=True,
    )


def page_title(title: str, icon: str, subtitle: str = "") -> None:
    st.markdown(
        f"<p style='margin:0 0 0.25rem 0; font-size:1.25rem;'><strong>{icon} {title}</strong></p>"
        f"<p style='margin:0; font-size:0.8rem; color:#666;'>{subtitle}</p>",
        unsafe_allow_html=True,
    )
    st.markdown("---")


def success_box(message: str) -> None:
    """Caixa de status positivo (ex.: caixa aberto)."""
    _box("success", message)


def warning_box(message: str) -> None:
    """Caixa de atenção (ex.: caixa fechado)."""
    _box("warning", message)


def difference_box(diferenca: float) -> None:
    """Resultado da conferência do caixa: falta, sobra ou valor exato."""
    from utils.formatters import format_currency

    if diferenca < 0:
        _box("danger", f"Falta dinheiro no caixa: {format_currency(diferenca)}")
    elif diferenca > 0:
        _box("warning", f"Sobra dinheiro no caixa: {format_currency(diferenca)}")
    else:
        _box("success", "Caixa conferido: valor contado igual ao do sistema.")


def show_error(exc: ServiceError) -> None:
    """Mostra o erro de um serviço sem interromper a página."""
    st.error(exc.message)
