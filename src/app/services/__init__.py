"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
O IO passa sempre pelos protocolos de app/protocols/.
"""
