"""
Comment service: comment CRUD with a transactional ``comment_count`` on
the parent post, and reply-tree assembly.

Design notes
------------
- Create, soft delete and hard delete run the comment write and the
  counter update in one session; either both commit or both roll back.
- ``post_id``, ``author_id`` and ``parent_comment_id`` are fixed at
  creation.  ``update_comment`` strips them so only ``text`` can change.
- Whether ``parent_comment_id`` points at a comment on the same post is
  not checked.
- Reply trees are built with an explicit work stack.  A visited set stops
  ``parent_comment_id`` cycles and ``max_depth`` bounds how far the
  builder descends; both cases are logged and the branch is cut.
"""
import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from post_service.database import transaction
from post_service.exceptions import NotFound
from post_service.models import Comment
from post_service.repositories import CommentRepository
from post_service.repositories.base import parse_id
from post_service.schemas import CommentTree
from post_service.services.post_service import PostService

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS: frozenset[str] = frozenset({"post_id", "author_id", "parent_comment_id"})


class CommentService:
    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        session_factory: async_sessionmaker[AsyncSession],
        max_depth: int = 32,
    ):
        self._comments = comment_repository
        self._posts = post_service
        self._session_factory = session_factory
        self._max_depth = max_depth

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_comment(self, data: dict) -> Comment:
        fields = dict(data)
        fields["post_id"] = parse_id(fields.get("post_id"))
        if fields.get("parent_comment_id") is not None:
            fields["parent_comment_id"] = parse_id(fields["parent_comment_id"])

        async with transaction(self._session_factory) as session:
            comment = await self._comments.create(fields, session=session)
            await self._posts.update_comment_counter(comment.post_id, "increment", session=session)

        logger.info("Created comment %s on post %s", comment.id, comment.post_id)
        return comment

    async def update_comment(self, comment_id: Any, data: dict) -> Optional[Comment]:
        safe_data = {k: v for k, v in data.items() if k not in _IMMUTABLE_FIELDS}
        return await self._comments.update(comment_id, safe_data)

    async def delete_comment(self, comment_id: Any) -> Comment:
        """Soft delete the comment and decrement its post's ``comment_count``."""
        async with transaction(self._session_factory) as session:
            comment = await self._require(comment_id, session)
            deleted = await self._comments.delete(comment_id, session=session)
            await self._posts.update_comment_counter(comment.post_id, "decrement", session=session)

        logger.info("Soft-deleted comment %s on post %s", deleted.id, deleted.post_id)
        return deleted

    async def hard_delete_comment(self, comment_id: Any) -> Comment:
        """Remove the comment and decrement its post's ``comment_count``."""
        async with transaction(self._session_factory) as session:
            comment = await self._require(comment_id, session)
            deleted = await self._comments.hard_delete(comment_id, session=session)
            await self._posts.update_comment_counter(comment.post_id, "decrement", session=session)

        logger.info("Removed comment %s from post %s", deleted.id, deleted.post_id)
        return deleted

    async def _require(self, comment_id: Any, session: AsyncSession) -> Comment:
        comment = await self._comments.find_by_id(comment_id, session=session)
        if comment is None:
            raise NotFound("Comment", str(comment_id))
        return comment

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_comment_by_id(self, comment_id: Any) -> Optional[Comment]:
        return await self._comments.find_by_id(comment_id)

    async def get_comments_by_post(self, post_id: Any) -> list[Comment]:
        return await self._comments.find_by_post(post_id)

    async def get_comments_by_author(self, author_id: str) -> list[Comment]:
        return await self._comments.find_by_author(author_id)

    async def get_comment_replies(self, parent_comment_id: Any) -> list[Comment]:
        """Direct replies only; see ``get_replies_recursive`` for the subtree."""
        return await self._comments.find_replies(parent_comment_id)

    async def get_replies_recursive(self, parent_comment_id: Any) -> list[CommentTree]:
        """
        Return every reply below *parent_comment_id* as a forest of
        ``CommentTree`` nodes.  Leaves carry ``replies == []``.
        """
        root_id = parse_id(parent_comment_id)
        roots: list[CommentTree] = []
        await self._expand([(root_id, roots, 1)], visited={root_id})
        return roots

    async def get_nested_comments_by_post(self, post_id: Any) -> list[CommentTree]:
        """Top-level comments of *post_id*, each with its full reply subtree."""
        top_level = await self._comments.find_by_post(post_id, top_level_only=True)
        forest = [CommentTree.model_validate(c) for c in top_level]
        await self._expand(
            [(node.id, node.replies, 1) for node in forest],
            visited={node.id for node in forest},
        )
        return forest

    async def _expand(
        self,
        pending: list[tuple[str, list[CommentTree], int]],
        visited: set[str],
    ) -> None:
        """
        Drain *pending*, a stack of (comment id, list receiving its replies, depth),
        fetching the direct replies of each entry and queueing them in turn.
        Sibling order inside every ``replies`` list follows the store.
        """
        while pending:
            parent_id, sink, depth = pending.pop()
            if depth > self._max_depth:
                logger.warning(
                    "Reply tree below comment %s exceeds depth %d; truncating",
                    parent_id,
                    self._max_depth,
                )
                continue
            for reply in await self._comments.find_replies(parent_id):
                if reply.id in visited:
                    logger.warning(
                        "Comment %s already in reply tree (cycle via %s); skipping",
                        reply.id,
                        parent_id,
                    )
                    continue
                visited.add(reply.id)
                node = CommentTree.model_validate(reply)
                sink.append(node)
                pending.append((node.id, node.replies, depth + 1))
