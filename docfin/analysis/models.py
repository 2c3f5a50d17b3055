from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = frozenset({INCOME, EXPENSE})


def json_number(value: Decimal) -> int | str:
    """Render a Decimal for JSON without losing precision.

    Integral values become ints; fractional values become their exact decimal
    string, since a float cannot carry every Decimal digit.
    """
    if value == value.to_integral_value():
        return int(value)
    return str(value)


@dataclass(frozen=True)
class Transaction:
    """A single signed money movement: positive is income, negative is expense."""

    id: str
    date: date
    description: str
    amount: Decimal
    type: str
    category: str

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": json_number(self.amount),
            "type": self.type,
            "category": self.category,
        }


@dataclass(frozen=True)
class FinancialSummary:
    """Aggregates derived from a transaction list, never taken from a producer."""

    total_income: Decimal = Decimal(0)
    total_expense: Decimal = Decimal(0)
    net_profit: Decimal = Decimal(0)
    transaction_count: int = 0

    def to_payload(self) -> dict[str, object]:
        return {
            "totalIncome": json_number(self.total_income),
            "totalExpense": json_number(self.total_expense),
            "netProfit": json_number(self.net_profit),
            "transactionCount": self.transaction_count,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal artifact of the analysis pipeline."""

    transactions: list[Transaction] = field(default_factory=list)
    summary: FinancialSummary = field(default_factory=FinancialSummary)
    insights: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        return {
            "transactions": [t.to_payload() for t in self.transactions],
            "summary": self.summary.to_payload(),
            "insights": list(self.insights),
        }


@dataclass(frozen=True)
class DocumentSummary:
    """Narrative summary of a document."""

    summary: str
    key_points: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        return {
            "summary": self.summary,
            "keyPoints": list(self.key_points),
            "recommendations": list(self.recommendations),
        }
