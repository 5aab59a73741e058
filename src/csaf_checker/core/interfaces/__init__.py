"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los checks concretos.
- Permite invertir dependencias: el processor depende del contrato, no de los checks.
"""
