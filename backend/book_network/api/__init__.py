"""Camada HTTP da aplicação."""
