"""
Historial de servicios realizados a cada vehículo.
"""
