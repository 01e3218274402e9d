"""
Dados de demonstração usados quando não há banco configurado.
"""
import bcrypt

DEMO_USER_EMAIL = "admin@vidracaria.com"
DEMO_USER_PASSWORD = "senha123"


def build_demo_data() -> dict:
    """Retorna um conjunto novo (independente) das tabelas de demonstração."""
    password_hash = bcrypt.hashpw(
        DEMO_USER_PASSWORD.encode("utf-8"), bcrypt.gensalt()
    ).decode("utf-8")

    return {
        "usuarios": [
            {"id": 1, "email": DEMO_USER_EMAIL, "nome": "Administrador", "role": "admin",
             "password_hash": password_hash, "ativo": True},
        ],
        "orcamentos": [
            {"id": 1, "cliente": "João Silva", "telefone": "(11) 98765-4321", "email": "",
             "data": "2025-06-05", "valor_total": 850.0, "status": "aprovado", "observacoes": "",
             "itens": [{"descricao": "Porta de vidro temperado 8mm", "quantidade": 1,
                        "valor_unitario": 850.0, "valor_total": 850.0}]},
            {"id": 2, "cliente": "Maria Oliveira", "telefone": "(11) 91234-5678", "email": "",
             "data": "2025-06-04", "valor_total": 1200.0, "status": "pendente", "observacoes": "",
             "itens": [{"descricao": "Box para banheiro", "quantidade": 2,
                        "valor_unitario": 600.0, "valor_total": 1200.0}]},
            {"id": 3, "cliente": "Carlos Santos", "telefone": "(11) 99876-5432", "email": "",
             "data": "2025-06-03", "valor_total": 3500.0, "status": "aprovado", "observacoes": "",
             "itens": [{"descricao": "Fachada em vidro laminado", "quantidade": 1,
                        "valor_unitario": 3500.0, "valor_total": 3500.0}]},
        ],
        "ordens_servico": [
            {"id": 1, "cliente": "João Silva", "telefone": "(11) 98765-4321", "email": "",
             "produto": "Porta de vidro temperado", "data_entrada": "2025-06-01",
             "data_entrega": "2025-06-10", "status": "em_producao", "valor": 850.0,
             "observacoes": "", "endereco_entrega": ""},
            {"id": 2, "cliente": "Maria Oliveira", "telefone": "(11) 91234-5678", "email": "",
             "produto": "Box para banheiro", "data_entrada": "2025-06-04",
             "data_entrega": "2025-06-15", "status": "em_aberto", "valor": 1200.0,
             "observacoes": "", "endereco_entrega": ""},
            {"id": 3, "cliente": "Carlos Santos", "telefone": "(11) 99876-5432", "email": "",
             "produto": "Espelho decorativo", "data_entrada": "2025-05-20",
             "data_entrega": "2025-06-01", "status": "entregue", "valor": 480.0,
             "observacoes": "", "endereco_entrega": ""},
        ],
        "estoque": [
            {"id": 1, "codigo": "V123", "nome": "Vidro temperado 8mm",
             "descricao": "Vidro temperado incolor 8mm", "quantidade": 10.0,
             "quantidade_minima": 5.0, "unidade": "chapa", "valor_unitario": 250.0,
             "fornecedor": "Vidros Brasil", "localizacao": "Prateleira A1",
             "ultima_entrada": "2025-06-01"},
            {"id": 2, "codigo": "V456", "nome": "Vidro comum 4mm",
             "descricao": "Vidro comum incolor 4mm", "quantidade": 3.0,
             "quantidade_minima": 5.0, "unidade": "chapa", "valor_unitario": 120.0,
             "fornecedor": "Vidros Brasil", "localizacao": "Prateleira A2",
             "ultima_entrada": "2025-05-15"},
            {"id": 3, "codigo": "P789", "nome": "Perfil de alumínio",
             "descricao": "Perfil de alumínio para box de banheiro", "quantidade": 5.0,
             "quantidade_minima": 10.0, "unidade": "barra", "valor_unitario": 80.0,
             "fornecedor": "Alumínios SA", "localizacao": "Prateleira B1",
             "ultima_entrada": "2025-05-20"},
        ],
        "estoque_movimentacoes": [
            {"id": 1, "produto_id": 1, "produto_nome": "Vidro temperado 8mm", "tipo": "entrada",
             "quantidade": 5.0, "data": "2025-06-01", "motivo": "compra",
             "observacoes": "Compra mensal"},
            {"id": 2, "produto_id": 1, "produto_nome": "Vidro temperado 8mm", "tipo": "saida",
             "quantidade": 2.0, "data": "2025-06-02", "motivo": "venda",
             "observacoes": "Venda para cliente João"},
            {"id": 3, "produto_id": 2, "produto_nome": "Vidro comum 4mm", "tipo": "entrada",
             "quantidade": 10.0, "data": "2025-05-15", "motivo": "compra", "observacoes": ""},
        ],
        "caixa": [
            {"id": 1, "data": "2025-06-05", "hora_abertura": "08:30", "valor_inicial": 200.0,
             "status": "aberto", "observacoes_abertura": "Início do expediente",
             "hora_fechamento": None, "valor_final": None, "valor_sistema": None,
             "diferenca": None, "observacoes_fechamento": None},
        ],
        "caixa_movimentacoes": [
            {"id": 1, "caixa_id": 1, "data": "2025-06-05", "hora": "09:00", "tipo": "entrada",
             "valor": 150.0, "descricao": "Recebimento à vista", "forma_pagamento": "dinheiro",
             "observacoes": ""},
            {"id": 2, "caixa_id": 1, "data": "2025-06-05", "hora": "10:30", "tipo": "entrada",
             "valor": 350.0, "descricao": "Pagamento de orçamento #123",
             "forma_pagamento": "cartao_credito", "observacoes": "Parcelado em 3x"},
            {"id": 3, "caixa_id": 1, "data": "2025-06-05", "hora": "12:30", "tipo": "saida",
             "valor": 50.0, "descricao": "Compra de material de escritório",
             "forma_pagamento": "dinheiro", "observacoes": ""},
        ],
        "caixa_fechamentos": [
            {"id": 1, "data": "2025-06-04", "hora_abertura": "08:00", "hora_fechamento": "18:00",
             "valor_inicial": 150.0, "valor_final": 850.0, "valor_sistema": 850.0,
             "diferenca": 0.0, "total_entradas": 800.0, "total_saidas": 100.0,
             "observacoes": ""},
            {"id": 2, "data": "2025-06-03", "hora_abertura": "08:15", "hora_fechamento": "18:30",
             "valor_inicial": 200.0, "valor_final": 1200.0, "valor_sistema": 1250.0,
             "diferenca": -50.0, "total_entradas": 1200.0, "total_saidas": 150.0,
             "observacoes": "Diferença a verificar"},
        ],
        "financas": [
            {"id": 1, "data": "2025-06-05", "tipo": "entrada", "categoria": "Vendas",
             "descricao": "Venda de vidro temperado", "valor": 1200.0, "observacoes": ""},
            {"id": 2, "data": "2025-06-04", "tipo": "saida", "categoria": "Fornecedores",
             "descricao": "Compra de material", "valor": 500.0, "observacoes": ""},
            {"id": 3, "data": "2025-06-03", "tipo": "entrada", "categoria": "Serviços",
             "descricao": "Instalação de box", "valor": 350.0, "observacoes": ""},
            {"id": 4, "data": "2025-05-15", "tipo": "saida", "categoria": "Aluguel",
             "descricao": "Aluguel do galpão", "valor": 1800.0, "observacoes": ""},
            {"id": 5, "data": "2025-05-10", "tipo": "entrada", "categoria": "Vendas",
             "descricao": "Espelho sob medida", "valor": 950.0, "observacoes": ""},
            {"id": 6, "data": "2025-04-15", "tipo": "saida", "categoria": "Energia",
             "descricao": "Conta de energia", "valor": 350.0, "observacoes": ""},
        ],
    }
