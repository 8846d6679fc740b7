"""Adapter Django do domínio de Pessoas."""
