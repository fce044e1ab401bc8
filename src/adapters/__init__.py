"""Adaptadores de I/O: cliente httpx, clientes REST por servicio y exportación JSON."""
