"""Repairs candidate analysis payloads into a valid AnalysisResult.

Both the AI extractor and the fallback extractor hand their output here as
loosely-typed dicts. Every field is coerced toward validity and the summary
is recomputed from the repaired transactions; nothing in this module raises.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from docfin.analysis.models import (
    EXPENSE,
    INCOME,
    TRANSACTION_TYPES,
    AnalysisResult,
    FinancialSummary,
    Transaction,
)
from docfin.analysis.vocabulary import DEFAULT_VOCABULARY, AnalysisVocabulary

MAX_DESCRIPTION_LENGTH = 100
_ZERO = Decimal(0)


def repair(
    candidate: Any,
    vocabulary: AnalysisVocabulary = DEFAULT_VOCABULARY,
) -> AnalysisResult:
    """Build an AnalysisResult from any candidate payload.

    The candidate's own ``summary`` is ignored; it is always derived from the
    repaired transactions. An AnalysisResult is repaired through its payload,
    so an already valid result comes back equal to itself.
    """
    if isinstance(candidate, AnalysisResult):
        candidate = candidate.to_payload()
    data: dict[str, Any] = candidate if isinstance(candidate, dict) else {}
    raw_transactions = data.get("transactions")
    if not isinstance(raw_transactions, list):
        raw_transactions = []
    transactions = _repair_transactions(raw_transactions, vocabulary)
    return AnalysisResult(
        transactions=transactions,
        summary=summarize_transactions(transactions),
        insights=_repair_insights(data.get("insights"), vocabulary),
    )


def summarize_transactions(transactions: list[Transaction]) -> FinancialSummary:
    total_income = sum((abs(t.amount) for t in transactions if t.type == INCOME), _ZERO)
    total_expense = sum((abs(t.amount) for t in transactions if t.type == EXPENSE), _ZERO)
    return FinancialSummary(
        total_income=total_income,
        total_expense=total_expense,
        net_profit=total_income - total_expense,
        transaction_count=len(transactions),
    )


def _repair_transactions(
    raw: list[Any], vocabulary: AnalysisVocabulary
) -> list[Transaction]:
    seen_ids: set[str] = set()
    transactions: list[Transaction] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            continue
        transaction = _repair_transaction(item, index, vocabulary)
        unique_id = _unique_id(transaction.id, index, seen_ids)
        seen_ids.add(unique_id)
        if unique_id != transaction.id:
            transaction = Transaction(
                id=unique_id,
                date=transaction.date,
                description=transaction.description,
                amount=transaction.amount,
                type=transaction.type,
                category=transaction.category,
            )
        transactions.append(transaction)
    return transactions


def _repair_transaction(
    raw: dict[str, Any], index: int, vocabulary: AnalysisVocabulary
) -> Transaction:
    txn_type = _coerce_type(raw.get("type"))
    amount = _coerce_amount(raw.get("amount"))
    # type is authoritative; the amount's sign follows it
    if (txn_type == INCOME and amount < 0) or (txn_type == EXPENSE and amount > 0):
        amount = -amount
    return Transaction(
        id=_coerce_id(raw.get("id"), index),
        date=_coerce_date(raw.get("date"), vocabulary.placeholder_date),
        description=_coerce_text(raw.get("description"), vocabulary.default_description)[
            :MAX_DESCRIPTION_LENGTH
        ].rstrip(),
        amount=amount,
        type=txn_type,
        category=_coerce_text(raw.get("category"), vocabulary.default_category),
    )


def _unique_id(candidate: str, index: int, seen: set[str]) -> str:
    if candidate not in seen:
        return candidate
    suffix = index + 1
    unique = f"{candidate}_{suffix}"
    while unique in seen:
        suffix += 1
        unique = f"{candidate}_{suffix}"
    return unique


def _coerce_id(value: Any, index: int) -> str:
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        text = str(value).strip()
        if text:
            return text
    return f"transaction_{index + 1}"


def _coerce_date(value: Any, placeholder: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return placeholder
    return placeholder


def _coerce_amount(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        return _ZERO
    try:
        if isinstance(value, float):
            amount = Decimal(repr(value))
        elif isinstance(value, (int, Decimal)):
            amount = Decimal(value)
        elif isinstance(value, str):
            amount = Decimal(value.strip())
        else:
            return _ZERO
    except (InvalidOperation, ValueError):
        return _ZERO
    if not amount.is_finite() or amount.is_zero():
        return _ZERO
    return amount


def _coerce_type(value: Any) -> str:
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRANSACTION_TYPES:
            return normalized
    return EXPENSE


def _coerce_text(value: Any, default: str) -> str:
    if value is None or isinstance(value, (dict, list)):
        return default
    text = str(value).strip()
    return text or default


def _repair_insights(value: Any, vocabulary: AnalysisVocabulary) -> list[str]:
    if not isinstance(value, list):
        return [vocabulary.default_insight]
    insights = [
        str(item).strip()
        for item in value
        if isinstance(item, (str, int, float)) and not isinstance(item, bool)
        and str(item).strip()
    ]
    return insights or [vocabulary.default_insight]
