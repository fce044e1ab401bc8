"""Core: configuración, logging, modelos del dominio, contratos y endpoints."""
