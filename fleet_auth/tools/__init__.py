"""Comandos de linha de comando: diagnóstico, inspeção de schema e migrações."""
