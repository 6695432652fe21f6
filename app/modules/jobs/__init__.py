"""
Módulo de Órdenes de trabajo (job cards).
"""
