from app.schemas.common import CamelModel, Money


class DayBalanceResponse(CamelModel):
    date: str
    balance: Money
    count: int


class LedgerSummaryResponse(CamelModel):
    income: Money
    expenses: Money
    result: Money
    days: list[DayBalanceResponse]
