"""所有者スコープのレコード読み込みヘルパー"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

from dailyhub.domain.errors import NotFoundError
from dailyhub.domain.models import RequestContext
from dailyhub.domain.ports import DocumentStore
from dailyhub.services.guard import AuthorizationGuard


class _FromDocument(Protocol):
    owner_uid: str

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Any: ...


T = TypeVar("T", bound=_FromDocument)


def load_owned(
    store: DocumentStore,
    ctx: RequestContext,
    collection: str,
    doc_id: str,
    model: type[T],
    kind: str,
) -> T:
    """
    レコードを取得し、所有者が ctx.uid であることを確認して返す。

    Raises:
        NotFoundError: レコードが存在しない場合
        UnauthorizedError: 所有者が一致しない場合
    """
    if not doc_id:
        raise NotFoundError(f"{kind.capitalize()} not found")
    data = store.get(collection, doc_id)
    if data is None:
        raise NotFoundError(f"{kind.capitalize()} not found")
    record = model.from_document(doc_id, data)
    AuthorizationGuard.ensure_owner(ctx, record.owner_uid, kind, doc_id)
    return record


def list_owned(
    store: DocumentStore, ctx: RequestContext, collection: str, model: type[T]
) -> list[T]:
    """ctx.uid が所有するレコードを全て返す"""
    return [
        model.from_document(doc_id, data)
        for doc_id, data in store.query(collection, {"ownerUid": ctx.uid})
    ]
