"""SecretItemService - シークレットスペース（フォルダ・ノート）の操作"""

from __future__ import annotations

import logging
from typing import Any

from dailyhub.domain.errors import CycleError, ValidationError
from dailyhub.domain.models import (
    ActionResult,
    RequestContext,
    SecretItem,
    SecretItemType,
)
from dailyhub.domain.ports import SECRET_ITEMS, DocumentStore
from dailyhub.services.records import list_owned, load_owned
from dailyhub.services.secret_tree import SecretTree
from dailyhub.services.validation import require_choice, require_text, utc_now_iso

logger = logging.getLogger(__name__)

# 更新可能なフィールド（API の入力キー）
_UPDATABLE = ("name", "content", "parent_id")


class SecretItemService:
    """所有者スコープのフォルダ・ノート操作

    parentId を書き込む操作（作成・移動）では毎回、親が自分のフォルダであること、
    循環しないこと、深さ上限に収まることを確認する。
    """

    def __init__(self, store: DocumentStore, tree: SecretTree) -> None:
        self._store = store
        self._tree = tree

    def list(self, ctx: RequestContext) -> list[SecretItem]:
        """自分の全項目をフォルダ優先・名前順で返す"""
        items = list_owned(self._store, ctx, SECRET_ITEMS, SecretItem)
        return sorted(items, key=lambda i: (not i.is_folder, i.name.lower()))

    def get(self, ctx: RequestContext, item_id: str) -> SecretItem:
        return load_owned(self._store, ctx, SECRET_ITEMS, item_id, SecretItem, "item")

    def create(
        self,
        ctx: RequestContext,
        parent_id: str | None,
        type: Any,
        name: Any,
    ) -> ActionResult:
        """フォルダまたはノートを作成する。ノートは空の本文で作られる"""
        name = require_text(name, "name")
        item_type = require_choice(type, SecretItemType, "type")
        parent_id = parent_id or None
        if parent_id:
            self._ensure_folder(ctx, parent_id)
            self._tree.ancestors(ctx, parent_id)

        item = SecretItem(
            id=self._store.new_id(SECRET_ITEMS),
            owner_uid=ctx.uid,
            type=item_type,
            name=name,
            parent_id=parent_id,
            updated_at=utc_now_iso(),
            content="" if item_type == SecretItemType.NOTE.value else None,
        )
        self._store.insert(SECRET_ITEMS, item.to_document(), doc_id=item.id)
        logger.info(
            "Secret item created: uid=%s, item_id=%s, type=%s, parent_id=%s",
            ctx.uid,
            item.id,
            item.type,
            parent_id,
        )
        return ActionResult(
            success=True,
            message="Created successfully",
            id=item.id,
            affected=(SECRET_ITEMS,),
        )

    def update(
        self, ctx: RequestContext, item_id: str, changes: dict[str, Any]
    ) -> ActionResult:
        """
        名前・本文・親フォルダをまとめて更新する。

        全フィールドを検証してから1回だけ書き込むため、
        どれか1つでも不正なら何も変更されない。

        Args:
            changes: "name" / "content" / "parent_id" のうち送られたもの
                     （parent_id=None はルートへの移動）
        """
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if not changes:
            raise ValidationError("No fields to update")

        item = self.get(ctx, item_id)
        fields: dict[str, Any] = {}
        if "name" in changes:
            fields["name"] = require_text(changes["name"], "name")
        if "content" in changes:
            fields["content"] = self._check_content(item, changes["content"])
        if "parent_id" in changes:
            fields["parentId"] = self._check_move(ctx, item, changes["parent_id"])

        self._write(ctx, item, fields)
        logger.info(
            "Secret item updated: uid=%s, item_id=%s, fields=%s",
            ctx.uid,
            item.id,
            sorted(fields),
        )
        return ActionResult(
            success=True,
            message="Updated successfully",
            id=item.id,
            affected=(SECRET_ITEMS,),
        )

    def rename(self, ctx: RequestContext, item_id: str, name: Any) -> ActionResult:
        return self.update(ctx, item_id, {"name": name})

    def update_content(
        self, ctx: RequestContext, item_id: str, content: Any
    ) -> ActionResult:
        """ノート本文を更新する（フォルダには本文を持たせない）"""
        return self.update(ctx, item_id, {"content": content})

    def move(
        self, ctx: RequestContext, item_id: str, new_parent_id: str | None
    ) -> ActionResult:
        """項目を別のフォルダ（None ならルート）へ移動する"""
        return self.update(ctx, item_id, {"parent_id": new_parent_id})

    def delete(self, ctx: RequestContext, item_id: str) -> ActionResult:
        """
        項目を削除する。フォルダの場合は子孫を全て削除する。

        子孫の収集で循環を検出した場合は何も削除しない。
        """
        item = self.get(ctx, item_id)
        subtree = self._tree.collect_subtree(ctx, item.id)
        batch = self._store.batch()
        for doc_id in subtree.ids:
            batch.delete(SECRET_ITEMS, doc_id)
        batch.commit()
        logger.info(
            "Secret item deleted: uid=%s, item_id=%s, removed=%d",
            ctx.uid,
            item.id,
            len(subtree.ids),
        )
        return ActionResult(
            success=True,
            message=f"Deleted {len(subtree.ids)} item(s)",
            id=item.id,
            affected=(SECRET_ITEMS,),
        )

    @staticmethod
    def _check_content(item: SecretItem, content: Any) -> str:
        if not isinstance(content, str):
            raise ValidationError("content must be a string")
        if item.is_folder:
            raise ValidationError("Folders have no content")
        return content

    def _check_move(
        self, ctx: RequestContext, item: SecretItem, new_parent_id: str | None
    ) -> str | None:
        """
        移動先を検証して正規化した parentId を返す。

        Raises:
            CycleError: 自分自身・自分の子孫の下へ移動しようとした場合、
                        または移動後に深さ上限を超える場合
        """
        new_parent_id = new_parent_id or None
        chain: list[str] = []
        if new_parent_id:
            if new_parent_id == item.id:
                raise CycleError("An item cannot be its own parent")
            self._ensure_folder(ctx, new_parent_id)
            chain = self._tree.ancestors(ctx, new_parent_id)
            if item.id in chain:
                raise CycleError("Cannot move a folder into its own descendant")

        height = self._tree.collect_subtree(ctx, item.id).height if item.is_folder else 0
        if len(chain) + height > self._tree.max_depth:
            raise CycleError("Folder tree exceeds the maximum depth")
        return new_parent_id

    def _ensure_folder(self, ctx: RequestContext, folder_id: str) -> SecretItem:
        parent = load_owned(
            self._store, ctx, SECRET_ITEMS, folder_id, SecretItem, "folder"
        )
        if not parent.is_folder:
            raise ValidationError("Parent must be a folder")
        return parent

    def _write(self, ctx: RequestContext, item: SecretItem, fields: dict[str, Any]) -> None:
        self._store.update(
            SECRET_ITEMS,
            item.id,
            {**fields, "updatedAt": utc_now_iso(), "ownerUid": ctx.uid},
        )
