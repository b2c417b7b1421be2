"""Shared helpers: console logging, HTTP session, date expressions."""
