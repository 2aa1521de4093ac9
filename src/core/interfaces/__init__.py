"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) para la API de la nube y el sistema de ficheros.
- Los servicios dependen de estas abstracciones; los tests inyectan fakes.
"""
