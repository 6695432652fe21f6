"""
Script para poblar el catálogo con los servicios y repuestos por defecto del taller.
"""
import logging

from sqlalchemy.orm import Session

from app.modules.catalog.models import CatalogItem, Visibility

logger = logging.getLogger(__name__)

OIL_GRADES = ["0W-20", "5W-30", "10W-40", "20W-50"]

DEFAULT_CATALOG = [
    {
        "name": "Oil Change",
        "type": "service",
        "description": "Engine oil and oil filter replacement",
        "cost": 1500,
        "base_price": 1500,
        "duration_minutes": 30,
        "estimated_time": "30 min",
        "sub_options": [
            {"key": "oilGrade", "label": "Oil grade", "type": "select", "options": OIL_GRADES},
        ],
        "allow_comments": True,
        "allowed_parts": ["Engine Oil", "Oil Filter"],
    },
    {
        "name": "Brake Service",
        "type": "service",
        "description": "Brake pad inspection and replacement",
        "cost": 3000,
        "base_price": 3000,
        "duration_minutes": 90,
        "estimated_time": "1.5 hours",
        "sub_options": [
            {"key": "axle", "label": "Axle", "type": "multiselect", "options": ["Front", "Rear"]},
        ],
        "allow_comments": True,
        "allowed_parts": ["Brake Pads"],
    },
    {
        "name": "Tuning",
        "type": "service",
        "description": "Engine tuning, spark plugs and throttle cleaning",
        "cost": 2500,
        "base_price": 2500,
        "duration_minutes": 120,
        "estimated_time": "2 hours",
        "allow_comments": True,
        "allowed_parts": ["Spark Plugs", "Air Filter"],
    },
    {
        "name": "Wheel Alignment",
        "type": "service",
        "description": "Four wheel alignment and balancing",
        "cost": 2000,
        "base_price": 2000,
        "duration_minutes": 60,
        "estimated_time": "1 hour",
    },
    {
        "name": "AC Service",
        "type": "service",
        "description": "AC gas refill and cooling check",
        "cost": 3500,
        "base_price": 3500,
        "duration_minutes": 90,
        "estimated_time": "1.5 hours",
        "sub_options": [{"key": "notes", "label": "Symptoms", "type": "text", "options": []}],
        "allow_comments": True,
    },
    {"name": "Engine Oil", "type": "product", "cost": 4500, "base_price": 4500, "unit": "litre", "quantity": 40},
    {"name": "Oil Filter", "type": "product", "cost": 800, "base_price": 800, "quantity": 25},
    {"name": "Air Filter", "type": "product", "cost": 1200, "base_price": 1200, "quantity": 20},
    {"name": "Brake Pads", "type": "product", "cost": 3500, "base_price": 3500, "unit": "set", "quantity": 10},
    {"name": "Spark Plugs", "type": "product", "cost": 600, "base_price": 600, "quantity": 32},
]


def populate_default_catalog(db: Session) -> int:
    """
    Inserta los ítems default que aún no existen (por nombre y tipo).
    Devuelve cuántos se crearon.
    """
    existing = {
        (name, item_type)
        for name, item_type in db.query(CatalogItem.name, CatalogItem.type).filter(
            CatalogItem.visibility == Visibility.DEFAULT.value
        )
    }

    created = 0
    for data in DEFAULT_CATALOG:
        if (data["name"], data["type"]) in existing:
            continue
        db.add(CatalogItem(**data, visibility=Visibility.DEFAULT.value, account=None))
        created += 1

    db.commit()
    logger.info(f"{created} default catalog items created")
    return created


if __name__ == "__main__":
    from app.core.config import settings
    from app.database.database import Database

    logging.basicConfig(level=logging.INFO)
    database = Database(settings.database_url)
    database.create_all()
    db = database.session()
    try:
        populate_default_catalog(db)
    finally:
        db.close()
