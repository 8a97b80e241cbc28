"""Camada de dados de autenticação multi-tenant."""

__version__ = "1.0.0"
