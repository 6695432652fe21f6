"""
Comentarios del equipo sobre una orden de trabajo.
"""
