from typing import List, Optional
from sqlalchemy import or_, select
from sqlalchemy.orm import Session
from fleet_auth.crud.base import CRUDBase
from fleet_auth.models.client import Client
from fleet_auth.schemas.client import ClientCreate, ClientUpdate


def _matches(text: str):
    # substring literal: % e _ digitados não viram curingas
    return or_(Client.name.icontains(text, autoescape=True), Client.slug.icontains(text, autoescape=True))


class CRUDClient(CRUDBase[Client, ClientCreate, ClientUpdate]):
    def get_by_slug(self, db: Session, slug: str) -> Optional[Client]:
        return self._one(db, select(Client).where(Client.slug == slug))

    def get_by_name(self, db: Session, name: str) -> Optional[Client]:
        return self._one(db, select(Client).where(Client.name == name))

    def exists_by_slug(self, db: Session, slug: str) -> bool:
        return self._exists(db, Client.slug == slug)

    def exists_by_name(self, db: Session, name: str) -> bool:
        return self._exists(db, Client.name == name)

    def list_active(self, db: Session) -> List[Client]:
        return self._all(db, select(Client).where(Client.is_active.is_(True)))

    def list_inactive(self, db: Session) -> List[Client]:
        return self._all(db, select(Client).where(Client.is_active.is_(False)))

    def search(self, db: Session, text: str) -> List[Client]:
        return self._all(db, select(Client).where(_matches(text)))

    def search_active(self, db: Session, text: str) -> List[Client]:
        return self._all(db, select(Client).where(Client.is_active.is_(True), _matches(text)))

    def count_active(self, db: Session) -> int:
        return self._count(db, Client.is_active.is_(True))

    def list_ordered_by_name(self, db: Session) -> List[Client]:
        return self._all(db, select(Client).order_by(Client.name.asc()))

    def list_active_ordered_by_name(self, db: Session) -> List[Client]:
        return self._all(db, select(Client).where(Client.is_active.is_(True)).order_by(Client.name.asc()))


client_crud = CRUDClient(Client)
