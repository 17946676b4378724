"""SecretTree - シークレットスペースのフォルダツリー走査

parentId で構成されるツリーを辿る。Firestore には外部キー制約がないため、
循環や異常に深い親子関係を検出したら CycleError を送出して処理を止める。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dailyhub.domain.errors import CycleError
from dailyhub.domain.models import RequestContext, SecretItemType
from dailyhub.domain.ports import SECRET_ITEMS, DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True)
class Subtree:
    """起点を含む子孫IDの集合"""

    ids: list[str]
    height: int  # 起点のみなら 0


class SecretTree:
    """所有者スコープのフォルダツリー操作"""

    def __init__(self, store: DocumentStore, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._store = store
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def collect_subtree(self, ctx: RequestContext, root_id: str) -> Subtree:
        """
        root_id 以下の全ての項目IDを幅優先で集める（root_id を含む）。

        子を持てるのはフォルダだけなので、ノートの下は検索しない。

        Raises:
            CycleError: 同じ項目に2度到達した場合、または深さ上限を超えた場合
        """
        ids = [root_id]
        visited = {root_id}
        frontier = [root_id]
        height = 0
        while frontier:
            next_frontier: list[str] = []
            found = False
            for parent_id in frontier:
                children = self._store.query(
                    SECRET_ITEMS, {"parentId": parent_id, "ownerUid": ctx.uid}
                )
                for child_id, data in children:
                    if child_id in visited:
                        logger.error(
                            "Cycle in secret tree: uid=%s, root=%s, item=%s",
                            ctx.uid,
                            root_id,
                            child_id,
                        )
                        raise CycleError("Folder tree contains a cycle")
                    visited.add(child_id)
                    ids.append(child_id)
                    found = True
                    if data.get("type") == SecretItemType.FOLDER.value:
                        next_frontier.append(child_id)
            if not found:
                break
            height += 1
            if height > self._max_depth:
                raise CycleError("Folder tree exceeds the maximum depth")
            frontier = next_frontier
        return Subtree(ids=ids, height=height)

    def ancestors(self, ctx: RequestContext, folder_id: str | None) -> list[str]:
        """
        folder_id から親を辿ってルートまでのIDを返す（folder_id を含む、近い順）。

        Raises:
            CycleError: 親を辿って同じ項目に戻った場合、または深さ上限を超えた場合
        """
        chain: list[str] = []
        current = folder_id
        while current:
            if current in chain:
                logger.error(
                    "Cycle in secret tree ancestors: uid=%s, item=%s", ctx.uid, current
                )
                raise CycleError("Folder tree contains a cycle")
            chain.append(current)
            if len(chain) > self._max_depth:
                raise CycleError("Folder tree exceeds the maximum depth")
            data = self._store.get(SECRET_ITEMS, current)
            if data is None or data.get("ownerUid") != ctx.uid:
                break
            current = data.get("parentId") or None
        return chain
