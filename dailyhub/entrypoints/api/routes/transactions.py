"""家計簿 API ルート

GET    /api/transactions           → 200 [Transaction...]
GET    /api/transactions/summary   → 200 { income, expense, balance }
POST   /api/transactions           → 201 ActionResponse
PATCH  /api/transactions/{id}      → 200 ActionResponse
DELETE /api/transactions/{id}      → 200 ActionResponse
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from dailyhub.domain.models import FinanceSummary, RequestContext
from dailyhub.entrypoints.api.deps import get_finance_service, get_request_context
from dailyhub.entrypoints.api.schemas import ActionResponse, to_action_response
from dailyhub.services.finance import FinanceService

router = APIRouter(prefix="/transactions", tags=["transactions"])


class TransactionCreateRequest(BaseModel):
    type: str | None = None
    # フォーム送信では文字列で届くこともある
    amount: float | str | None = None
    description: str | None = None
    date: str | None = None
    category: str = ""


class TransactionUpdateRequest(BaseModel):
    type: str | None = None
    amount: float | str | None = None
    description: str | None = None
    date: str | None = None
    category: str | None = None


class TransactionResponse(BaseModel):
    id: str
    type: str
    amount: float
    description: str
    date: str
    category: str


class SummaryResponse(BaseModel):
    income: float
    expense: float
    balance: float

    @classmethod
    def from_model(cls, s: FinanceSummary) -> SummaryResponse:
        return cls(income=s.income, expense=s.expense, balance=s.balance)


@router.get("", response_model=list[TransactionResponse])
def list_transactions(
    ctx: RequestContext = Depends(get_request_context),
    service: FinanceService = Depends(get_finance_service),
) -> list[TransactionResponse]:
    return [
        TransactionResponse(
            id=t.id,
            type=t.type,
            amount=t.amount,
            description=t.description,
            date=t.date,
            category=t.category,
        )
        for t in service.list(ctx)
    ]


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    ctx: RequestContext = Depends(get_request_context),
    service: FinanceService = Depends(get_finance_service),
) -> SummaryResponse:
    """収入・支出・残高を返す"""
    summary = service.summary(ctx)
    return SummaryResponse.from_model(summary)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ActionResponse)
def create_transaction(
    body: TransactionCreateRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: FinanceService = Depends(get_finance_service),
) -> ActionResponse:
    result = service.create(
        ctx,
        type=body.type,
        amount=body.amount,
        description=body.description,
        date=body.date,
        category=body.category,
    )
    return to_action_response(result)


@router.patch("/{transaction_id}", response_model=ActionResponse)
def update_transaction(
    transaction_id: str,
    body: TransactionUpdateRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: FinanceService = Depends(get_finance_service),
) -> ActionResponse:
    result = service.update(ctx, transaction_id, body.model_dump(exclude_unset=True))
    return to_action_response(result)


@router.delete("/{transaction_id}", response_model=ActionResponse)
def delete_transaction(
    transaction_id: str,
    ctx: RequestContext = Depends(get_request_context),
    service: FinanceService = Depends(get_finance_service),
) -> ActionResponse:
    return to_action_response(service.delete(ctx, transaction_id))
