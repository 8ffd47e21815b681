"""Núcleo: configuração, segurança, erros e dependencies."""
