"""
Demo dataset for a fresh installation.

Enabled with ``SEED_DEMO_DATA=true``.  Each table is filled only when it
is empty, so restarting the API never duplicates rows and never touches
data entered by users.  Dates are relative to the moment of seeding so
that the dashboard's monthly figures and the upcoming maintenance list
show something meaningful.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List

from .repository import TableRepository, utcnow

logger = logging.getLogger(__name__)


def _demo_rows() -> Dict[str, List[Dict[str, Any]]]:
    now = utcnow()
    day = timedelta(days=1)
    return {
        "pops": [
            {
                "name": "POP Central",
                "code": "POP-001",
                "address": "Rua Principal, 123, Centro, São Paulo, SP",
                "latitude": -23.5505,
                "longitude": -46.6333,
                "status": "active",
            },
            {
                "name": "POP Norte",
                "code": "POP-002",
                "address": "Av. Norte, 456, Zona Norte, São Paulo, SP",
                "latitude": -23.5,
                "longitude": -46.6,
                "status": "active",
            },
        ],
        "technicians": [
            {
                "name": "João Silva",
                "email": "joao.silva@empresa.com",
                "phone": "(11) 99999-1111",
                "specialization": "Ar Condicionado",
                "status": "active",
                "access_level": "technician",
                "pop_id": 1,
            },
            {
                "name": "Maria Santos",
                "email": "maria.santos@empresa.com",
                "phone": "(11) 99999-2222",
                "specialization": "Elétrica",
                "status": "active",
                "access_level": "technician",
                "pop_id": 2,
            },
            {
                "name": "Pedro Costa",
                "email": "pedro.costa@empresa.com",
                "phone": "(11) 99999-3333",
                "specialization": "Rede",
                "status": "vacation",
                "access_level": "senior",
            },
        ],
        "activities": [
            {
                "title": "Manutenção Ar Condicionado",
                "description": "Verificar e limpar filtros do ar condicionado",
                "type": "manutencao_ar_condicionado",
                "status": "pending",
                "priority": "medium",
                "assigned_to": 1,
                "pop_id": 1,
                "scheduled_date": now + day,
            },
            {
                "title": "Limpeza do POP",
                "description": "Limpeza geral das instalações",
                "type": "limpeza_pop",
                "status": "in_progress",
                "priority": "low",
                "assigned_to": 2,
                "pop_id": 2,
                "scheduled_date": now,
            },
        ],
        "generators": [
            {
                "name": "Gerador Principal",
                "model": "C150 D6",
                "manufacturer": "Cummins",
                "serial_number": "CUM-150-0001",
                "power_kva": 150,
                "type": "primary",
                "fuel_type": "diesel",
                "status": "operational",
                "pop_id": 1,
                "location": "Sala de energia",
                "installed_at": now - 365 * day,
                "running_hours": 1250,
                "fuel_level": 80,
            },
            {
                "name": "Gerador Reserva",
                "model": "GTA 80",
                "manufacturer": "Stemac",
                "serial_number": "STM-080-0002",
                "power_kva": 80,
                "type": "backup",
                "fuel_type": "diesel",
                "status": "maintenance",
                "pop_id": 2,
                "location": "Área externa",
                "installed_at": now - 200 * day,
                "running_hours": 430,
                "fuel_level": 35,
            },
        ],
        "supplies": [
            {
                "pop_id": 1,
                "generator_id": 1,
                "fuel_type": "diesel",
                "quantity": 500,
                "unit": "liters",
                "cost": 2500.0,
                "supplier": "Posto Shell",
                "supply_date": now,
                "notes": "Abastecimento de rotina",
            },
            {
                "pop_id": 2,
                "generator_id": 2,
                "fuel_type": "gasolina",
                "quantity": 200,
                "unit": "liters",
                "cost": 1200.0,
                "supplier": "Posto Ipiranga",
                "supply_date": now - day,
                "notes": "Abastecimento emergencial",
            },
        ],
        "checklist_templates": [
            {
                "name": "Preventiva de gerador",
                "description": "Inspeção mensal do grupo gerador",
                "category": "generator",
                "active": True,
                "items": [
                    {"id": "gen-oil", "type": "yes_no", "title": "Nível de óleo adequado?", "required": True},
                    {"id": "gen-fuel", "type": "number", "title": "Nível de combustível (%)", "required": True},
                    {"id": "gen-photo", "type": "photo_upload", "title": "Foto do painel"},
                    {"id": "gen-notes", "type": "free_text", "title": "Observações"},
                ],
            },
        ],
        "maintenances": [
            {
                "title": "Preventiva mensal do gerador",
                "asset_type": "generator",
                "asset_id": 1,
                "asset_name": "Gerador Principal",
                "status": "scheduled",
                "scheduled_date": now + 7 * day,
                "frequency": "monthly",
                "checklist": [],
                "notes": "",
                "photo_urls": [],
                "technician_id": 2,
            },
        ],
    }


_REPOSITORIES = {
    "pops": TableRepository("pops"),
    "technicians": TableRepository("technicians"),
    "activities": TableRepository("activities"),
    "generators": TableRepository("generators"),
    "supplies": TableRepository("supplies"),
    "checklist_templates": TableRepository(
        "checklist_templates", json_columns=("items",), bool_columns=("active",)
    ),
    "maintenances": TableRepository("maintenances", json_columns=("checklist", "photo_urls")),
}


def seed_demo_data() -> None:
    """Insert the demo rows into every table that is still empty."""
    for table, rows in _demo_rows().items():
        repository = _REPOSITORIES[table]
        if repository.count():
            continue
        for row in rows:
            repository.insert(row)
        logger.info("Seeded %s demo rows into %s", len(rows), table)
