"""
Módulo de Facturación del taller

- Numeración automática INV-000001
- Ítems con cantidad y precio; subtotal y total calculados
- Estados Pending, Paid, Cancelled y métodos de pago del mostrador
"""
