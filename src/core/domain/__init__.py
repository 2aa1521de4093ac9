"""Modelos y errores del dominio.

Por qué:
- Aquí viven la aplicación, sus entornos y los aliases (Pydantic v2).
- El dominio no conoce httpx, YAML ni la CLI: solo conceptos de hosting.
"""
