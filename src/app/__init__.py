"""App — orquestração da verificação de identidade e setup de conta.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de pasta, mensagem, conexão e resultado
- use_cases/: verificação de identidade e setup de conta
- services/: estratégias de verificação (sem IO direto)
- infra/: implementações concretas de IO
- protocols/: contratos/interfaces (transporte EAS, store de contas)
- observability/: correlation_id e métricas em logs estruturados

Padrão: app executa; fsm governa; config configura; utils apoia.
"""
