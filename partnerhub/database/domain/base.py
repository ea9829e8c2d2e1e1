"""
Inicializador de domínio: cada domínio declara nome, prefixo de tabelas
e os domínios dos quais depende.
"""
import logging
from typing import ClassVar, List, Tuple

from sqlalchemy import Table

logger = logging.getLogger(__name__)


class DomainInitializer:
    name: ClassVar[str] = ""
    table_prefix: ClassVar[str] = ""
    # Domínios cujas tabelas precisam existir antes (FKs)
    depends_on: ClassVar[Tuple[str, ...]] = ()

    def tables(self) -> List[Table]:
        from partnerhub.database.db_connection import Base

        return [t for t in Base.metadata.sorted_tables if t.name.startswith(self.table_prefix)]

    def create_tables(self) -> int:
        from partnerhub.database.db_connection import engine

        tables = self.tables()
        if not tables:
            logger.warning(f"[DB] Domínio {self.name}: nenhuma tabela com prefixo '{self.table_prefix}'")
            return 0
        for table in tables:
            table.create(engine, checkfirst=True)
        return len(tables)

    def seed(self) -> None:
        """Dados iniciais (nenhum por padrão)."""

    def initialize(self) -> None:
        created = self.create_tables()
        self.seed()
        logger.info(f"[DB] Domínio {self.name} pronto ({created} tabela(s))")
