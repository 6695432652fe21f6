"""
Reports Module

Reportes del taller sobre las tablas existentes (no crea tablas propias):
- Resumen financiero por periodo y por método de pago
- Tendencia mensual de ingresos
- Servicios más solicitados
- Desempeño diario por día de negocio

Architecture Pattern: Service Layer
- routers/ -> Define FastAPI endpoints con validaciones
- services/ -> Lógica de negocio y generación de consultas SQL
- schemas/ -> Modelos de respuesta
"""
