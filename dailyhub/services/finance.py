"""FinanceService - 収支レコードの CRUD と集計"""

from __future__ import annotations

import logging
from typing import Any

from dailyhub.domain.errors import ValidationError
from dailyhub.domain.models import (
    ActionResult,
    FinanceSummary,
    RequestContext,
    Transaction,
    TransactionType,
)
from dailyhub.domain.ports import FINANCE, DocumentStore
from dailyhub.services.records import list_owned, load_owned
from dailyhub.services.validation import (
    parse_amount,
    require_choice,
    require_date,
    require_text,
)

logger = logging.getLogger(__name__)


def summarize(transactions: list[Transaction]) -> FinanceSummary:
    """収入・支出の合計を計算する"""
    income = sum(
        t.amount for t in transactions if t.type == TransactionType.INCOME.value
    )
    expense = sum(
        t.amount for t in transactions if t.type == TransactionType.EXPENSE.value
    )
    return FinanceSummary(income=income, expense=expense)


class FinanceService:
    """所有者スコープの収支操作"""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def list(self, ctx: RequestContext) -> list[Transaction]:
        """自分の収支一覧を新しい日付順で返す"""
        transactions = list_owned(self._store, ctx, FINANCE, Transaction)
        return sorted(transactions, key=lambda t: t.date, reverse=True)

    def summary(self, ctx: RequestContext) -> FinanceSummary:
        return summarize(list_owned(self._store, ctx, FINANCE, Transaction))

    def create(
        self,
        ctx: RequestContext,
        type: Any,
        amount: Any,
        description: Any,
        date: Any,
        category: Any = "",
    ) -> ActionResult:
        """収支を登録する"""
        transaction = Transaction(
            id=self._store.new_id(FINANCE),
            owner_uid=ctx.uid,
            type=require_choice(type, TransactionType, "type"),
            amount=parse_amount(amount),
            description=require_text(description, "description"),
            date=require_date(date),
            category=category or "",
        )
        self._store.insert(FINANCE, transaction.to_document(), doc_id=transaction.id)
        logger.info(
            "Transaction created: uid=%s, transaction_id=%s", ctx.uid, transaction.id
        )
        return ActionResult(
            success=True,
            message="Transaction added successfully",
            id=transaction.id,
            affected=(FINANCE,),
        )

    def update(
        self, ctx: RequestContext, transaction_id: str, changes: dict[str, Any]
    ) -> ActionResult:
        """収支を部分更新する"""
        fields = self._validate_changes(changes)
        transaction = load_owned(
            self._store, ctx, FINANCE, transaction_id, Transaction, "transaction"
        )
        fields["ownerUid"] = ctx.uid
        self._store.update(FINANCE, transaction.id, fields)
        logger.info(
            "Transaction updated: uid=%s, transaction_id=%s", ctx.uid, transaction.id
        )
        return ActionResult(
            success=True,
            message="Transaction updated successfully",
            id=transaction.id,
            affected=(FINANCE,),
        )

    def delete(self, ctx: RequestContext, transaction_id: str) -> ActionResult:
        transaction = load_owned(
            self._store, ctx, FINANCE, transaction_id, Transaction, "transaction"
        )
        self._store.delete(FINANCE, transaction.id)
        logger.info(
            "Transaction deleted: uid=%s, transaction_id=%s", ctx.uid, transaction.id
        )
        return ActionResult(
            success=True,
            message="Transaction deleted successfully",
            id=transaction.id,
            affected=(FINANCE,),
        )

    @staticmethod
    def _validate_changes(changes: dict[str, Any]) -> dict[str, Any]:
        validators = {
            "type": lambda v: require_choice(v, TransactionType, "type"),
            "amount": parse_amount,
            "description": lambda v: require_text(v, "description"),
            "date": require_date,
            "category": lambda v: v or "",
        }
        unknown = set(changes) - set(validators)
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if not changes:
            raise ValidationError("No fields to update")
        return {key: validators[key](value) for key, value in changes.items()}
