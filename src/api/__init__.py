"""API: camada de borda com o backend remoto.

Responsabilidades:
- Transporte HTTP com credenciais em cookie
- Interceptor de 401 (renovação + um único reenvio)
- Parsing de payloads e de erros estruturados

NÃO PODE conter: FSM, regras de sessão, agendamento de renovação.
"""
