"""Seed the post-service database with posts, threaded comments and likes.

Everything goes through the service layer so ``like_count`` and
``comment_count`` match the rows that were actually written.
"""
import argparse
import asyncio
import random
import time

from post_service.config import settings
from post_service.database import Base, create_engine, create_session_factory
from post_service.dependencies import build_container

HASHTAGS = ["python", "fastapi", "travel", "food", "music", "photography",
            "fitness", "books", "gaming", "art", "coding", "nature"]


async def seed(small: bool = False, database_url: str | None = None):
    num_users = 10 if small else 50
    num_posts = 50 if small else 2000
    max_comments_per_post = 3 if small else 8
    reply_chance = 0.4

    print(f"Seeding: {num_users} users, {num_posts} posts")
    start = time.perf_counter()

    engine = create_engine(database_url or settings.DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    container = build_container(create_session_factory(engine), settings)
    users = [f"user_{i:04d}" for i in range(num_users)]
    total_comments = 0
    total_likes = 0

    for i in range(num_posts):
        post = await container.post_service.create_post({
            "author_id": random.choice(users),
            "content": f"Post {i}: thoughts on {random.choice(HASHTAGS)}.",
            "hashtags": random.sample(HASHTAGS, k=random.randint(0, 3)),
            "images": [],
        })

        # Comments, some of them replies to an earlier comment on the same post.
        thread: list[str] = []
        for _ in range(random.randint(0, max_comments_per_post)):
            parent = random.choice(thread) if thread and random.random() < reply_chance else None
            comment = await container.comment_service.create_comment({
                "post_id": post.id,
                "parent_comment_id": parent,
                "author_id": random.choice(users),
                "text": "Nice one!" if parent is None else "Agreed.",
            })
            thread.append(comment.id)
            total_comments += 1

        for user in random.sample(users, k=random.randint(0, min(10, num_users))):
            await container.like_service.create_like({"post_id": post.id, "user_id": user})
            total_likes += 1

        if (i + 1) % 500 == 0:
            print(f"  {i + 1} posts created")

    await engine.dispose()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Posts: {num_posts}")
    print(f"  Comments: {total_comments}")
    print(f"  Likes: {total_likes}")


def main():
    parser = argparse.ArgumentParser(description="Seed the post-service database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (50 posts)")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small, database_url=args.database_url))


if __name__ == "__main__":
    main()
