from decimal import Decimal

from sqlalchemy import Numeric
from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    # Money columns keep cents exactly
    type_annotation_map = {Decimal: Numeric(14, 2)}

    @declared_attr.directive
    def __tablename__(cls) -> str:  # type: ignore
        return cls.__name__.lower()
