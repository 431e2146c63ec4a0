"""
Direct service-layer tests: counter transactions, immutable fields,
toggle semantics and reply-tree assembly, without HTTP in between.
"""
import uuid

import pytest

from post_service.exceptions import InvalidIdentifier, NotFound, PersistenceError, ValidationError
from post_service.models import EntityStatus
from post_service.services.comment_service import CommentService


async def _comment(container, post_id, text, parent=None, author="a"):
    return await container.comment_service.create_comment(
        {"post_id": post_id, "parent_comment_id": parent, "author_id": author, "text": text}
    )


async def _reload(container, post_id):
    return await container.post_service.get_post_by_id(post_id)


# ---------------------------------------------------------------------------
# post_service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_post_starts_active_with_zero_counters(container):
    post = await container.post_service.create_post({"author_id": "u1", "content": "hi"})
    assert post.like_count == 0
    assert post.comment_count == 0
    assert post.status == EntityStatus.ACTIVE


@pytest.mark.asyncio
async def test_update_post_ignores_author_id(container, post):
    updated = await container.post_service.update_post(
        post.id, {"author_id": "intruder", "content": "changed", "hashtags": ["a", "b"]}
    )
    assert updated.author_id == "u1"
    assert updated.content == "changed"
    assert updated.hashtags == ["a", "b"]


@pytest.mark.asyncio
async def test_delete_post_is_soft(container, post):
    deleted = await container.post_service.delete_post(post.id)
    assert deleted.status == EntityStatus.DELETED
    assert (await _reload(container, post.id)).status == EntityStatus.DELETED


@pytest.mark.asyncio
async def test_hard_delete_post(container, post):
    assert (await container.post_service.hard_delete_post(post.id)).id == post.id
    assert await _reload(container, post.id) is None


@pytest.mark.asyncio
async def test_counter_action_must_be_known(container, post):
    with pytest.raises(ValidationError):
        await container.post_service.update_like_counter(post.id, "double")


@pytest.mark.asyncio
async def test_counter_on_missing_post_raises_not_found(container):
    with pytest.raises(NotFound):
        await container.post_service.update_comment_counter(str(uuid.uuid4()), "increment")


# ---------------------------------------------------------------------------
# comment_service: counters and transactions
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_then_delete_comment_nets_zero(container, post):
    comment = await _comment(container, post.id, "first")
    assert (await _reload(container, post.id)).comment_count == 1

    deleted = await container.comment_service.delete_comment(comment.id)
    assert deleted.status == EntityStatus.DELETED
    assert deleted.text == "first"
    assert (await _reload(container, post.id)).comment_count == 0
    assert await container.comment_service.get_comment_by_id(comment.id) is not None


@pytest.mark.asyncio
async def test_hard_delete_comment_decrements_and_removes(container, post):
    comment = await _comment(container, post.id, "first")
    await container.comment_service.hard_delete_comment(comment.id)
    assert (await _reload(container, post.id)).comment_count == 0
    assert await container.comment_service.get_comment_by_id(comment.id) is None


@pytest.mark.asyncio
async def test_delete_missing_comment_raises_without_touching_counter(container, post):
    await _comment(container, post.id, "keep")
    with pytest.raises(NotFound):
        await container.comment_service.delete_comment(str(uuid.uuid4()))
    with pytest.raises(NotFound):
        await container.comment_service.hard_delete_comment(str(uuid.uuid4()))
    assert (await _reload(container, post.id)).comment_count == 1


@pytest.mark.asyncio
async def test_comment_on_missing_post_rolls_back(container):
    ghost_post = str(uuid.uuid4())
    with pytest.raises(NotFound):
        await _comment(container, ghost_post, "orphan")
    assert await container.comment_service.get_comments_by_post(ghost_post) == []


@pytest.mark.asyncio
async def test_comment_with_malformed_post_id(container):
    with pytest.raises(InvalidIdentifier):
        await _comment(container, "nope", "bad")


@pytest.mark.asyncio
async def test_update_comment_only_changes_text(container, post):
    other_post = await container.post_service.create_post({"author_id": "u9", "content": "other"})
    parent = await _comment(container, post.id, "parent")
    comment = await _comment(container, post.id, "child", parent=parent.id)

    updated = await container.comment_service.update_comment(
        comment.id,
        {
            "text": "edited",
            "post_id": other_post.id,
            "author_id": "intruder",
            "parent_comment_id": None,
        },
    )
    assert updated.text == "edited"
    assert updated.post_id == post.id
    assert updated.author_id == "a"
    assert updated.parent_comment_id == parent.id


# ---------------------------------------------------------------------------
# comment_service: reply trees
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_nested_comments_tree(container, post):
    c1 = await _comment(container, post.id, "c1")
    c2 = await _comment(container, post.id, "c2")
    r1 = await _comment(container, post.id, "r1", parent=c1.id)
    r2 = await _comment(container, post.id, "r2", parent=c1.id)
    r1a = await _comment(container, post.id, "r1a", parent=r1.id)

    forest = await container.comment_service.get_nested_comments_by_post(post.id)

    assert [n.id for n in forest] == [c1.id, c2.id]
    assert [n.id for n in forest[0].replies] == [r1.id, r2.id]
    assert [n.id for n in forest[0].replies[0].replies] == [r1a.id]
    assert forest[0].replies[0].replies[0].replies == []
    assert forest[0].replies[1].replies == []
    assert forest[1].replies == []


@pytest.mark.asyncio
async def test_replies_recursive_below_reply(container, post):
    c1 = await _comment(container, post.id, "c1")
    r1 = await _comment(container, post.id, "r1", parent=c1.id)
    r1a = await _comment(container, post.id, "r1a", parent=r1.id)

    subtree = await container.comment_service.get_replies_recursive(c1.id)
    assert [n.id for n in subtree] == [r1.id]
    assert [n.id for n in subtree[0].replies] == [r1a.id]
    assert await container.comment_service.get_replies_recursive(r1a.id) == []


@pytest.mark.asyncio
async def test_direct_replies_are_flat(container, post):
    c1 = await _comment(container, post.id, "c1")
    r1 = await _comment(container, post.id, "r1", parent=c1.id)
    await _comment(container, post.id, "r1a", parent=r1.id)

    replies = await container.comment_service.get_comment_replies(c1.id)
    assert [c.id for c in replies] == [r1.id]


@pytest.mark.asyncio
async def test_reply_tree_survives_parent_cycle(container, post):
    a = await _comment(container, post.id, "a")
    b = await _comment(container, post.id, "b", parent=a.id)
    # Corrupt the chain: a now claims b as its parent, forming a -> b -> a.
    await container.comment_repository.update(a.id, {"parent_comment_id": b.id})

    subtree = await container.comment_service.get_replies_recursive(a.id)
    assert [n.id for n in subtree] == [b.id]
    assert subtree[0].replies == []


@pytest.mark.asyncio
async def test_reply_tree_depth_limit(app, container, post):
    service = CommentService(
        container.comment_repository,
        container.post_service,
        app.state.session_factory,
        max_depth=2,
    )
    root = await _comment(container, post.id, "root")
    parent = root
    chain = []
    for i in range(4):
        parent = await _comment(container, post.id, f"level {i + 1}", parent=parent.id)
        chain.append(parent)

    subtree = await service.get_replies_recursive(root.id)
    assert subtree[0].id == chain[0].id
    assert subtree[0].replies[0].id == chain[1].id
    assert subtree[0].replies[0].replies == []


# ---------------------------------------------------------------------------
# like_service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_like_increments_counter(container, post):
    like = await container.like_service.create_like({"post_id": post.id, "user_id": "u2"})
    assert like.user_id == "u2"
    assert (await _reload(container, post.id)).like_count == 1


@pytest.mark.asyncio
async def test_duplicate_like_fails_and_keeps_counter(container, post):
    await container.like_service.create_like({"post_id": post.id, "user_id": "u2"})
    with pytest.raises(PersistenceError):
        await container.like_service.create_like({"post_id": post.id, "user_id": "u2"})
    assert (await _reload(container, post.id)).like_count == 1
    assert len(await container.like_service.get_likes_by_post(post.id)) == 1


@pytest.mark.asyncio
async def test_like_on_missing_post_rolls_back(container):
    ghost_post = str(uuid.uuid4())
    with pytest.raises(NotFound):
        await container.like_service.create_like({"post_id": ghost_post, "user_id": "u2"})
    assert await container.like_service.get_likes_by_user("u2") == []


@pytest.mark.asyncio
async def test_delete_like_decrements_counter(container, post):
    like = await container.like_service.create_like({"post_id": post.id, "user_id": "u2"})
    await container.like_service.delete_like(like.id)
    assert (await _reload(container, post.id)).like_count == 0
    assert await container.like_service.get_like_by_id(like.id) is None
    with pytest.raises(NotFound):
        await container.like_service.delete_like(like.id)


@pytest.mark.asyncio
async def test_toggle_like_scenario(container, post):
    """create like -> toggle (removed) -> toggle (created again)."""
    await container.like_service.create_like({"post_id": post.id, "user_id": "u2"})
    assert (await _reload(container, post.id)).like_count == 1

    assert await container.like_service.toggle_like(post.id, "u2") is None
    assert (await _reload(container, post.id)).like_count == 0

    like = await container.like_service.toggle_like(post.id, "u2")
    assert like is not None
    assert like.post_id == post.id
    assert (await _reload(container, post.id)).like_count == 1


@pytest.mark.asyncio
async def test_is_post_liked_by_user(container, post):
    assert await container.like_service.is_post_liked_by_user(post.id, "u2") is False
    await container.like_service.toggle_like(post.id, "u2")
    assert await container.like_service.is_post_liked_by_user(post.id, "u2") is True
    assert await container.like_service.is_post_liked_by_user(post.id, "u3") is False


@pytest.mark.asyncio
async def test_children_of_removed_post_can_still_be_deleted(container, post):
    comment = await _comment(container, post.id, "left behind")
    other = await _comment(container, post.id, "also left")
    await container.like_service.create_like({"post_id": post.id, "user_id": "u3"})
    await container.post_service.hard_delete_post(post.id)

    deleted = await container.comment_service.delete_comment(comment.id)
    assert deleted.status == EntityStatus.DELETED
    assert (await container.comment_service.get_comment_by_id(comment.id)).status == EntityStatus.DELETED

    await container.comment_service.hard_delete_comment(other.id)
    assert await container.comment_service.get_comment_by_id(other.id) is None

    assert await container.like_service.toggle_like(post.id, "u3") is None
    assert await container.like_service.is_post_liked_by_user(post.id, "u3") is False


@pytest.mark.asyncio
async def test_decrement_on_missing_post_returns_none(container):
    assert await container.post_service.update_like_counter(str(uuid.uuid4()), "decrement") is None
