from datetime import datetime
from decimal import Decimal

from sqlalchemy import DECIMAL, DateTime, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class P2PPriceDB(Base):
	__tablename__ = 'p2p_prices'

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	fiat: Mapped[str] = mapped_column(String(5), nullable=False)
	side: Mapped[str] = mapped_column(String(4), nullable=False)
	price_avg: Mapped[Decimal | None] = mapped_column(DECIMAL(precision=18, scale=6), nullable=True)
	updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

	__table_args__ = (Index('idx_p2p_prices_fiat_side', 'fiat', 'side'),)
