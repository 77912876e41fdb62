from typing import List, Optional
from sqlalchemy.orm import Session
from vhsa.models.school import School, Screener


class CRUDSchool:
    def get_by_name(self, db: Session, name: str) -> Optional[School]:
        return db.query(School).filter(School.name == name).first()

    def get_active(self, db: Session) -> List[School]:
        return (
            db.query(School)
            .filter(School.active == True)
            .order_by(School.name)
            .all()
        )


class CRUDScreener:
    def get_by_name(self, db: Session, name: str) -> Optional[Screener]:
        return db.query(Screener).filter(Screener.name == name).first()

    def get_active(self, db: Session) -> List[Screener]:
        return (
            db.query(Screener)
            .filter(Screener.active == True)
            .order_by(Screener.name)
            .all()
        )


school = CRUDSchool()
screener = CRUDScreener()
