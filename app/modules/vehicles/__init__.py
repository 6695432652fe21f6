"""
Módulo de Vehículos de los clientes.
"""
