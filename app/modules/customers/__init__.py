"""
Módulo de Clientes del taller.
"""
