import enum
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from sqlalchemy.orm import Session

from app.models.client import Client

CLIENT_ID_COLUMN = "clientId"
CLIENT_NAME_COLUMNS = ("clientName", "client")


class ResolutionStatus(str, enum.Enum):
    RESOLVED = "resolved"
    NEW_CLIENT = "new_client"  # Имя есть, клиента нет - строка откладывается
    INVALID = "invalid"  # Нет ни id, ни имени


@dataclass
class Resolution:
    status: ResolutionStatus
    client_id: Optional[int] = None
    client_name: Optional[str] = None


@dataclass
class ClientSnapshot:
    """Снимок клиентов на момент импорта: имя (в нижнем регистре) -> id и id -> имя"""
    by_name: Dict[str, int] = field(default_factory=dict)
    by_id: Dict[int, str] = field(default_factory=dict)

    @classmethod
    def load(cls, db: Session) -> "ClientSnapshot":
        snapshot = cls()
        for client_id, client_name in db.query(Client.id, Client.client_name).order_by(Client.id).all():
            snapshot.add(client_id, client_name)
        return snapshot

    def add(self, client_id: int, client_name: str) -> None:
        self.by_id[client_id] = client_name
        # При дублях имени побеждает первый (самый старый) клиент
        self.by_name.setdefault(client_name.strip().lower(), client_id)

    def find_by_name(self, client_name: str) -> Optional[int]:
        return self.by_name.get(client_name.strip().lower())


def _parse_client_id(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def resolve_client(row: Mapping[str, str], snapshot: ClientSnapshot) -> Resolution:
    """Определить клиента строки по clientId, затем по имени (clientName или client)"""
    client_id = _parse_client_id((row.get(CLIENT_ID_COLUMN) or "").strip())
    if client_id is not None and client_id in snapshot.by_id:
        return Resolution(ResolutionStatus.RESOLVED, client_id, snapshot.by_id[client_id])

    for column in CLIENT_NAME_COLUMNS:
        name = (row.get(column) or "").strip()
        if not name:
            continue
        found = snapshot.find_by_name(name)
        if found is not None:
            return Resolution(ResolutionStatus.RESOLVED, found, snapshot.by_id[found])
        return Resolution(ResolutionStatus.NEW_CLIENT, client_name=name)

    return Resolution(ResolutionStatus.INVALID)
