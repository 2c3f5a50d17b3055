"""Deterministic, offline transaction extraction used when the AI step fails."""

import re
from decimal import Decimal
from typing import Any

from docfin.analysis.models import EXPENSE, INCOME, FinancialSummary, Transaction
from docfin.analysis.validator import summarize_transactions
from docfin.analysis.vocabulary import DEFAULT_VOCABULARY, AnalysisVocabulary
from docfin.logging.logger import Log

MIN_LINE_LENGTH = 10
DESCRIPTION_LIMIT = 50

_AMOUNT_TOKEN = re.compile(
    r"(?P<currency>(?:Rp\.?|IDR|USD|\$)\s*)?(?P<number>\d[\d.,]*)",
    re.IGNORECASE,
)
_SEPARATORS = re.compile(r"[.,]")


def find_amount(line: str) -> Decimal | None:
    """Return the value of the line's currency-like token.

    A currency-prefixed token wins over bare numbers; otherwise the first
    number is used. Separators are dropped, so ``5,000,000`` and ``5.000.000``
    both read as five million.
    """
    matches = list(_AMOUNT_TOKEN.finditer(line))
    if not matches:
        return None
    chosen = next((m for m in matches if m["currency"]), matches[0])
    digits = _SEPARATORS.sub("", chosen["number"])
    return Decimal(digits) if digits else None


class FallbackExtractor:
    """Builds a candidate analysis from text using keyword and number patterns.

    The returned candidate always holds at least one transaction: when no
    amount is found, the vocabulary's illustrative placeholders are used.
    """

    def __init__(self, vocabulary: AnalysisVocabulary = DEFAULT_VOCABULARY) -> None:
        self._vocabulary = vocabulary

    def extract(self, text: str) -> dict[str, Any]:
        transactions = self._scan(text)
        if transactions:
            Log.info(f"Fallback extraction found {len(transactions)} transactions")
        else:
            Log.warning("Fallback extraction found no amounts, using placeholder transactions")
            transactions = list(self._vocabulary.placeholders)

        summary = summarize_transactions(transactions)
        return {
            "transactions": [t.to_payload() for t in transactions],
            "summary": summary.to_payload(),
            "insights": self._insights(summary),
        }

    def _scan(self, text: str) -> list[Transaction]:
        transactions: list[Transaction] = []
        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if len(line) < MIN_LINE_LENGTH:
                continue
            amount = find_amount(line)
            if amount is None or amount <= self._vocabulary.materiality_threshold:
                continue
            transactions.append(self._build(line, amount, len(transactions) + 1))
        return transactions

    def _build(self, line: str, amount: Decimal, sequence: int) -> Transaction:
        txn_type = EXPENSE if self._vocabulary.expense_pattern.search(line) else INCOME
        description = line[:DESCRIPTION_LIMIT]
        if len(line) > DESCRIPTION_LIMIT:
            description += "..."
        return Transaction(
            id=f"fallback_{sequence}",
            date=self._vocabulary.placeholder_date,
            description=description,
            amount=-amount if txn_type == EXPENSE else amount,
            type=txn_type,
            category=self._vocabulary.categorize(line),
        )

    def _insights(self, summary: FinancialSummary) -> list[str]:
        vocabulary = self._vocabulary
        return [
            vocabulary.fallback_intro_insight,
            vocabulary.fallback_count_insight.format(count=summary.transaction_count),
            vocabulary.profit_insight
            if summary.total_income > summary.total_expense
            else vocabulary.loss_insight,
        ]
