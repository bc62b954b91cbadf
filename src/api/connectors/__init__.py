"""Connectors: adapters de borda para APIs externas.

Estrutura:
- cafe/: backend da cafeteria (identidade e credenciais em cookie)
"""

__all__: list[str] = []
