"""Interfaces/abstracciones del Core.

Por qué:
- Define los contratos (Protocol) de cada servicio del API y del autorizador JWT.
- Los clientes HTTP los implementan; los endpoints dependen solo de ellos.
"""
