"""
Catálogo de servicios y repuestos

- Ítems `default`: globales, sin dueño, solo Admin los crea o desactiva
- Ítems `local`: propios de cada cuenta; el dueño los edita y elimina
"""
