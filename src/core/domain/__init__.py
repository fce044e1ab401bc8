"""Modelos del dominio: DTOs del API, errores tipados y vistas.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce httpx ni la CLI: solo la forma del wire y sus reglas.
"""
