"""App: orquestração da sessão autenticada.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- sessions/: SessionManager, RefreshScheduler, VisibilityMonitor
- events/: sinais de sessão (publish/subscribe)
- protocols/: contratos/interfaces
- infra/: implementações concretas (notifier)
- observability/: correlation_id e métricas em logs

Padrão: app orquestra; api transporta; fsm governa; utils apoia.
"""
