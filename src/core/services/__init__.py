"""Servicios del Core: endpoints con autorización JWT por scopes."""
