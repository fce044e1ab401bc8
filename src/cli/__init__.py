"""Capa CLI (typer + rich): flags -> payloads -> clientes REST -> tablas/JSON."""
