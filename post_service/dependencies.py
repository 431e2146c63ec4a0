"""
Composition root.

``build_container`` wires repositories -> services -> controllers once,
from a session factory and the settings object, and ``create_app`` keeps
the result on ``app.state.container``.  Route handlers receive their
controller through the small ``Depends`` helpers below, so tests can
build an app around any engine without touching module globals.
"""
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from post_service.config import Settings
from post_service.controllers import CommentController, LikeController, PostController
from post_service.repositories import CommentRepository, LikeRepository, PostRepository
from post_service.services.comment_service import CommentService
from post_service.services.like_service import LikeService
from post_service.services.post_service import PostService


@dataclass(frozen=True)
class Container:
    post_repository: PostRepository
    comment_repository: CommentRepository
    like_repository: LikeRepository
    post_service: PostService
    comment_service: CommentService
    like_service: LikeService
    post_controller: PostController
    comment_controller: CommentController
    like_controller: LikeController


def build_container(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> Container:
    post_repository = PostRepository(session_factory)
    comment_repository = CommentRepository(session_factory)
    like_repository = LikeRepository(session_factory)

    post_service = PostService(post_repository)
    comment_service = CommentService(
        comment_repository,
        post_service,
        session_factory,
        max_depth=settings.COMMENT_TREE_MAX_DEPTH,
    )
    like_service = LikeService(like_repository, post_service, session_factory)

    return Container(
        post_repository=post_repository,
        comment_repository=comment_repository,
        like_repository=like_repository,
        post_service=post_service,
        comment_service=comment_service,
        like_service=like_service,
        post_controller=PostController(post_service),
        comment_controller=CommentController(comment_service),
        like_controller=LikeController(like_service),
    )


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_post_controller(request: Request) -> PostController:
    return get_container(request).post_controller


def get_comment_controller(request: Request) -> CommentController:
    return get_container(request).comment_controller


def get_like_controller(request: Request) -> LikeController:
    return get_container(request).like_controller
