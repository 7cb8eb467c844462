from __future__ import annotations

from sqlalchemy import Engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qrdine.application.ports.storage import KeyValueStore, StorageUnavailableError
from qrdine.infrastructure.storage.sql_models import Base, KeyValueModel
from qrdine.infrastructure.storage.sql_session import get_engine


class SqlKeyValueStore(KeyValueStore):
    def __init__(
        self,
        database_url: str = "sqlite:///qrdine.db",
        key_prefix: str = "",
        engine: Engine | None = None,
    ) -> None:
        self._engine = engine or get_engine(database_url)
        self._key_prefix = key_prefix
        Base.metadata.create_all(self._engine, tables=[KeyValueModel.__table__])

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def read(self, key: str) -> str | None:
        statement = select(KeyValueModel.value).where(KeyValueModel.key == self._key(key))
        try:
            with Session(self._engine) as session:
                return session.execute(statement).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"database read failed for {key}") from exc

    def write(self, key: str, value: str) -> None:
        try:
            with Session(self._engine) as session:
                model = session.get(KeyValueModel, self._key(key))
                if model is None:
                    session.add(KeyValueModel(key=self._key(key), value=value))
                else:
                    model.value = value
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"database write failed for {key}") from exc

    def delete(self, key: str) -> None:
        statement = delete(KeyValueModel).where(KeyValueModel.key == self._key(key))
        try:
            with Session(self._engine) as session:
                session.execute(statement)
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"database delete failed for {key}") from exc
